"""
Module collecteur principal de la sonde

Ce module orchestre la collecte de tous les faits du poste :
- Appel de chaque collecteur spécialisé, une seule fois et dans l'ordre
- Assemblage du rapport composite
- Regroupement des avertissements de collecte
"""

import time
from typing import Any, Dict, List, Optional

from ..collectors.licensing import LicensedProductCollector, OemProductKeyCollector
from ..collectors.platform.windows import WindowsFactSource
from ..collectors.software import OfficeCollector
from ..collectors.system import HostnameCollector, OperatingSystemCollector, SerialNumberCollector
from .models import CollectionResult, EndpointReport, HostIdentity


class EndpointCollector:
    """
    Collecteur principal qui assemble le rapport du poste

    Chaque collecteur gère lui-même ses échecs : l'assemblage est donc
    inconditionnel et un collecteur en échec ne dégrade que son propre
    enregistrement.
    """

    def __init__(self, config, logger, source=None):
        """
        Initialise le collecteur principal

        Args:
            config: Instance de ProbeConfig
            logger: Instance de ProbeLogger
            source: Instance de SystemFactSource (WindowsFactSource par défaut)
        """
        self.config = config
        self.logger = logger.get_logger()
        self.source = source or WindowsFactSource()

        office_pattern = config.get_collection_config()['office_pattern']

        self.hostname_collector = HostnameCollector(self.source, self.logger)
        self.serial_collector = SerialNumberCollector(self.source, self.logger)
        self.os_collector = OperatingSystemCollector(self.source, self.logger)
        self.office_collector = OfficeCollector(self.source, self.logger, office_pattern)
        self.licensing_collector = LicensedProductCollector(self.source, self.logger)
        self.oem_key_collector = OemProductKeyCollector(self.source, self.logger)

        self.warnings: List[str] = []
        self.last_collection_duration: Optional[float] = None

    def collect(self) -> EndpointReport:
        """
        Lance la collecte complète du poste

        Returns:
            EndpointReport: Rapport composite, toujours complet
        """
        start_time = time.time()
        self.warnings = []
        self.logger.info("=== Début de collecte des informations du poste ===")

        hostname = self._run(self.hostname_collector)
        serial_number = self._run(self.serial_collector)
        self.logger.info(f"Poste: {hostname} (numéro de série: {serial_number})")

        operating_system = self._run(self.os_collector)
        installed_office = self._run(self.office_collector)
        licensed_products = self._run(self.licensing_collector)
        oem_product_key = self._run(self.oem_key_collector)

        report = EndpointReport(
            identity=HostIdentity(hostname=hostname, serial_number=serial_number),
            operating_system=operating_system,
            installed_office=installed_office,
            licensed_products=licensed_products,
            oem_product_key=oem_product_key,
        )

        self.last_collection_duration = time.time() - start_time
        self.logger.info(f"Collecte terminée en {self.last_collection_duration:.2f} secondes")
        self.logger.info(f"Collecté: {len(installed_office)} installation(s) Office, "
                         f"{len(licensed_products)} produit(s) sous licence")

        return report

    def _run(self, collector) -> Any:
        self.logger.debug(f"Début collecte {collector.collector_name}")
        result: CollectionResult = collector.collect()
        if result.warning:
            self.warnings.append(f"{collector.collector_name}: {result.warning}")
        return result.value

    def get_collection_stats(self) -> Dict[str, Any]:
        """
        Retourne les statistiques de la dernière collecte

        Returns:
            dict: Durée et avertissements de la dernière collecte
        """
        return {
            'collection_duration': self.last_collection_duration,
            'warnings_count': len(self.warnings),
            'warnings': self.warnings.copy()
        }
