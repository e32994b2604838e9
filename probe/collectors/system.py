"""
Collecteurs d'identité et de système d'exploitation

- Nom d'hôte
- Numéro de série BIOS
- Description du système d'exploitation
"""

from typing import Any, Dict

from .base import BaseCollector
from ..core.models import CollectionResult, NOT_AVAILABLE, OperatingSystemInfo


class HostnameCollector(BaseCollector):
    description = "le nom d'hôte"

    def collect(self) -> CollectionResult:
        result = self._safe_execute(self.source.get_hostname, NOT_AVAILABLE)
        if result.ok:
            result.value = self._clean_string(result.value)
        return result


class SerialNumberCollector(BaseCollector):
    description = "le numéro de série BIOS"

    def collect(self) -> CollectionResult:
        result = self._safe_execute(self.source.get_bios_serial_number, NOT_AVAILABLE)
        if result.ok:
            result.value = self._clean_string(result.value)
        return result


class OperatingSystemCollector(BaseCollector):
    """
    Collecte la description du système d'exploitation

    Chaque champ retombe indépendamment sur "N/A" s'il est absent.
    """

    description = "les informations du système d'exploitation"

    def collect(self) -> CollectionResult:
        result = self._safe_execute(self.source.get_operating_system, OperatingSystemInfo())
        if result.ok:
            result.value = self._build_os_info(result.value or {})
        return result

    def _build_os_info(self, raw: Dict[str, Any]) -> OperatingSystemInfo:
        return OperatingSystemInfo(
            caption=self._clean_string(raw.get('Caption')),
            version=self._clean_string(raw.get('Version')),
            architecture=self._clean_string(raw.get('OSArchitecture')),
            build_number=self._clean_string(raw.get('BuildNumber')),
        )
