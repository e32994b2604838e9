"""
Source de faits spécifique Windows

Ce module utilise les API Windows :
- WMI (Windows Management Instrumentation) via le paquet wmi
- Registre Windows via winreg
"""

import os
import socket
from typing import Any, Dict, List, Optional

from .source import SystemFactSource

UNINSTALL_PATH = r"SOFTWARE\Microsoft\Windows\CurrentVersion\Uninstall"
SOFTWARE_PROTECTION_PATH = r"SOFTWARE\Microsoft\Windows NT\CurrentVersion\SoftwareProtectionPlatform"
BACKUP_PRODUCT_KEY_VALUE = "BackupProductKeyDefault"

UNINSTALL_VALUES = ['DisplayName', 'DisplayVersion', 'Publisher', 'InstallDate']

LICENSED_PRODUCT_PROPERTIES = [
    'Name',
    'Description',
    'LicenseStatus',
    'PartialProductKey',
    'LicenseFamily',
    'ProductKeyChannel',
    'IsKeyManagementServiceMachine',
]


class WindowsFactSource(SystemFactSource):
    """
    Lit les faits du poste via WMI et le registre

    La connexion WMI est ouverte à la première requête puis réutilisée.
    Sur une plateforme non-Windows, l'import de wmi ou winreg lève
    ImportError, ce que les collecteurs traitent comme un échec de lecture.
    """

    def __init__(self):
        self._connection = None

    def _wmi(self):
        if self._connection is None:
            import wmi
            self._connection = wmi.WMI()
        return self._connection

    def get_hostname(self) -> str:
        return os.environ.get("COMPUTERNAME") or socket.gethostname()

    def get_bios_serial_number(self) -> Optional[str]:
        for bios in self._wmi().Win32_BIOS():
            return bios.SerialNumber
        return None

    def get_operating_system(self) -> Dict[str, Any]:
        for os_info in self._wmi().Win32_OperatingSystem():
            return {
                'Caption': os_info.Caption,
                'Version': os_info.Version,
                'OSArchitecture': os_info.OSArchitecture,
                'BuildNumber': os_info.BuildNumber,
            }
        return {}

    def get_uninstall_entries(self) -> List[Dict[str, Any]]:
        """
        Parcourt les clés de désinstallation des vues 64 et 32 bits

        Une sous-clé illisible est ignorée sans interrompre le parcours.
        Sur Windows 32 bits les deux vues sont identiques : les doublons
        (DisplayName, DisplayVersion) ne sont gardés qu'une fois.

        Returns:
            list: Une entrée par sous-clé, les valeurs absentes valant None
        """
        import winreg

        entries = []
        seen = set()
        for view in (winreg.KEY_WOW64_64KEY, winreg.KEY_WOW64_32KEY):
            try:
                key = winreg.OpenKey(winreg.HKEY_LOCAL_MACHINE, UNINSTALL_PATH, 0, winreg.KEY_READ | view)
            except FileNotFoundError:
                continue

            with key:
                subkey_count = winreg.QueryInfoKey(key)[0]
                for i in range(subkey_count):
                    try:
                        subkey_name = winreg.EnumKey(key, i)
                        with winreg.OpenKey(key, subkey_name) as subkey:
                            entry = {
                                value_name: self._query_value(subkey, value_name)
                                for value_name in UNINSTALL_VALUES
                            }
                    except OSError:
                        # Sous-clé protégée ou supprimée pendant le parcours
                        continue

                    identity = (entry['DisplayName'], entry['DisplayVersion'])
                    if entry['DisplayName'] is not None and identity in seen:
                        continue
                    seen.add(identity)
                    entries.append(entry)

        return entries

    @staticmethod
    def _query_value(key, value_name: str):
        import winreg

        try:
            return winreg.QueryValueEx(key, value_name)[0]
        except FileNotFoundError:
            return None

    def get_licensed_products(self) -> List[Dict[str, Any]]:
        query = (
            f"SELECT {', '.join(LICENSED_PRODUCT_PROPERTIES)} "
            "FROM SoftwareLicensingProduct WHERE PartialProductKey IS NOT NULL"
        )
        return [
            {prop: getattr(product, prop, None) for prop in LICENSED_PRODUCT_PROPERTIES}
            for product in self._wmi().query(query)
        ]

    def get_oa3x_product_key(self) -> Dict[str, Any]:
        for service in self._wmi().SoftwareLicensingService():
            return {
                'OA3xOriginalProductKey': service.OA3xOriginalProductKey,
                'OA3xOriginalProductKeyDescription': service.OA3xOriginalProductKeyDescription,
            }
        return {}

    def get_backup_product_key(self) -> Optional[str]:
        import winreg

        try:
            with winreg.OpenKey(winreg.HKEY_LOCAL_MACHINE, SOFTWARE_PROTECTION_PATH) as key:
                return self._query_value(key, BACKUP_PRODUCT_KEY_VALUE)
        except FileNotFoundError:
            return None
