"""
Collecteur des installations Microsoft Office

Lit les entrées de désinstallation du registre et ne garde que celles
dont le nom d'affichage correspond au motif Office configuré.
"""

import re
from typing import Any, Dict, List

from .base import BaseCollector
from ..core.config import DEFAULT_OFFICE_PATTERN
from ..core.models import CollectionResult, OfficeInstallation


class OfficeCollector(BaseCollector):
    """
    Collecteur des installations Office

    Les entrées sans DisplayName sont des composants techniques et
    sont ignorées.
    """

    description = "les installations Office"

    def __init__(self, source, logger, office_pattern: str = DEFAULT_OFFICE_PATTERN):
        super().__init__(source, logger)
        try:
            self.office_pattern = re.compile(office_pattern, re.IGNORECASE)
        except re.error as e:
            self.logger.warning(f"Motif Office invalide '{office_pattern}' ({e}), motif par défaut utilisé")
            self.office_pattern = re.compile(DEFAULT_OFFICE_PATTERN, re.IGNORECASE)

    def collect(self) -> CollectionResult:
        result = self._safe_execute(self.source.get_uninstall_entries, [])
        if result.ok:
            result.value = self._filter_office(result.value or [])
            self.logger.debug(f"{len(result.value)} installation(s) Office trouvée(s)")
        return result

    def _filter_office(self, entries: List[Dict[str, Any]]) -> List[OfficeInstallation]:
        installations = []
        for entry in entries:
            display_name = entry.get('DisplayName')
            if not display_name or not self.office_pattern.search(str(display_name)):
                continue

            installations.append(OfficeInstallation(
                display_name=self._clean_string(display_name),
                display_version=self._clean_string(entry.get('DisplayVersion')),
                publisher=self._clean_string(entry.get('Publisher')),
                install_date=self._clean_string(entry.get('InstallDate')),
            ))

        return installations
