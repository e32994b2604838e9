"""
Module d'export des rapports de la sonde

Écrit le rapport d'un poste sous <destination>/<hostname>/ :
- Cinq tables CSV (HostInfo, OperatingSystem, LicensedProducts,
  InstalledOffice, OEMProductKey)
- Un document JSON complet EndpointData_<hostname>.json

Chaque artefact est indépendant : l'échec de l'un est journalisé et
n'empêche pas l'écriture des suivants. Seule l'impossibilité de créer
le dossier du poste interrompt l'export.
"""

import csv
import json
import os
import re
from pathlib import Path
from typing import Any, Dict, List, Union

from .models import EndpointReport

HOST_INFO_COLUMNS = ['Hostname', 'SerialNumber']

OPERATING_SYSTEM_COLUMNS = HOST_INFO_COLUMNS + [
    'OperatingSystem', 'OSVersion', 'OSArchitecture', 'OSBuildNumber'
]

LICENSED_PRODUCTS_COLUMNS = HOST_INFO_COLUMNS + [
    'Name', 'Description', 'LicenseStatus', 'LicenseStatusDescription',
    'PartialProductKey', 'LicenseFamily', 'ProductKeyChannel',
    'IsKeyManagementServiceMachine'
]

INSTALLED_OFFICE_COLUMNS = HOST_INFO_COLUMNS + [
    'DisplayName', 'DisplayVersion', 'Publisher', 'InstallDate'
]

OEM_PRODUCT_KEY_COLUMNS = HOST_INFO_COLUMNS + [
    'OA3xOriginalProductKey', 'OA3xOriginalProductKeyDescription',
    'OA3xOriginalProductKeyResult'
]

UNSAFE_PATH_CHARS = re.compile(r'[\\/:*?"<>|]')


def safe_path_name(hostname: str) -> str:
    """
    Forme du nom d'hôte utilisable comme nom de dossier ou de fichier

    Un nom d'hôte valide est conservé tel quel ; les séparateurs et
    caractères interdits par Windows (ex. la sentinelle "N/A") sont
    remplacés par "_".
    """
    return UNSAFE_PATH_CHARS.sub('_', hostname)


class ReportExporter:
    """
    Exporteur des rapports de poste vers des fichiers CSV et JSON
    """

    def __init__(self, logger):
        """
        Args:
            logger: Instance de ProbeLogger
        """
        self.logger = logger.get_logger()
        self.written_files: List[Path] = []
        self.skipped_artifacts: List[str] = []
        self.failed_artifacts: List[str] = []

    def export(self, report: EndpointReport, destination_root: Union[str, os.PathLike]) -> bool:
        """
        Exporte le rapport complet d'un poste

        Args:
            report: Rapport composite du poste
            destination_root: Dossier racine des rapports

        Returns:
            bool: False si le dossier du poste n'a pas pu être créé
        """
        self.written_files = []
        self.skipped_artifacts = []
        self.failed_artifacts = []

        host_name = safe_path_name(report.hostname)
        host_dir = Path(destination_root) / host_name
        try:
            host_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            self.logger.error(f"Impossible de créer le dossier de sortie {host_dir}: {e}")
            return False

        self.logger.info(f"Export des données vers: {host_dir}")

        identity = {'Hostname': report.hostname, 'SerialNumber': report.serial_number}
        os_info = report.operating_system

        self._write_table(host_dir, 'HostInfo', HOST_INFO_COLUMNS, [identity])

        self._write_table(host_dir, 'OperatingSystem', OPERATING_SYSTEM_COLUMNS, [{
            **identity,
            'OperatingSystem': os_info.caption,
            'OSVersion': os_info.version,
            'OSArchitecture': os_info.architecture,
            'OSBuildNumber': os_info.build_number,
        }])

        self._write_table(host_dir, 'LicensedProducts', LICENSED_PRODUCTS_COLUMNS, [
            {**identity, **product.to_dict()} for product in report.licensed_products
        ])

        self._write_table(host_dir, 'InstalledOffice', INSTALLED_OFFICE_COLUMNS, [
            {**identity, **office.to_dict()} for office in report.installed_office
        ])

        self._write_table(host_dir, 'OEMProductKey', OEM_PRODUCT_KEY_COLUMNS, [
            {**identity, **report.oem_product_key.to_dict()}
        ])

        self._write_document(host_dir / f"EndpointData_{host_name}.json", report.to_dict())

        self.logger.info(f"Export terminé: {len(self.written_files)} fichier(s) écrit(s), "
                         f"{len(self.skipped_artifacts)} ignoré(s), {len(self.failed_artifacts)} en échec")
        return True

    def _write_table(self, host_dir: Path, name: str, columns: List[str], rows: List[Dict[str, Any]]):
        """
        Écrit une table CSV, ou l'ignore si elle n'a aucune ligne

        Args:
            host_dir: Dossier du poste
            name: Nom de l'artefact (sans extension)
            columns: Colonnes, dans l'ordre d'écriture
            rows: Lignes à écrire
        """
        if not rows:
            self.logger.warning(f"Aucune donnée pour {name}, fichier non créé")
            self.skipped_artifacts.append(name)
            return

        csv_path = host_dir / f"{name}.csv"
        try:
            with open(csv_path, 'w', newline='', encoding='utf-8') as f:
                writer = csv.DictWriter(
                    f,
                    fieldnames=columns,
                    extrasaction="ignore",
                    restval="",
                    quoting=csv.QUOTE_ALL
                )
                writer.writeheader()
                writer.writerows(rows)
            self.written_files.append(csv_path)
            self.logger.info(f"CSV enregistré: {csv_path}")
        except (OSError, ValueError, csv.Error) as e:
            self.failed_artifacts.append(name)
            self.logger.error(f"Échec de l'écriture de {csv_path}: {e}")

    def _write_document(self, json_path: Path, document: Dict[str, Any]):
        try:
            with open(json_path, 'w', encoding='utf-8') as f:
                json.dump(document, f, indent=2, ensure_ascii=False)
            self.written_files.append(json_path)
            self.logger.info(f"Données JSON enregistrées: {json_path}")
        except (OSError, TypeError, ValueError) as e:
            self.failed_artifacts.append(json_path.stem)
            self.logger.error(f"Échec de l'écriture de {json_path}: {e}")
