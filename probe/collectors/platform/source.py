"""
Interface des sources de faits système

Une source de faits est la seule frontière d'E/S de la sonde : chaque
méthode lit une famille de faits sur la machine et peut lever une
exception. Les collecteurs se chargent de convertir les échecs en
sentinelles.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


class SystemFactSource(ABC):
    """
    Source abstraite des faits lus sur le poste

    Les noms des clés retournées suivent les propriétés WMI et les
    valeurs du registre Windows.
    """

    @abstractmethod
    def get_hostname(self) -> str:
        pass

    @abstractmethod
    def get_bios_serial_number(self) -> str:
        pass

    @abstractmethod
    def get_operating_system(self) -> Dict[str, Any]:
        """
        Returns:
            dict: Clés Caption, Version, OSArchitecture, BuildNumber
        """
        pass

    @abstractmethod
    def get_uninstall_entries(self) -> List[Dict[str, Any]]:
        """
        Returns:
            list: Entrées de désinstallation (DisplayName, DisplayVersion,
                Publisher, InstallDate)
        """
        pass

    @abstractmethod
    def get_licensed_products(self) -> List[Dict[str, Any]]:
        """
        Returns:
            list: Produits SoftwareLicensingProduct ayant une clé partielle
        """
        pass

    @abstractmethod
    def get_oa3x_product_key(self) -> Dict[str, Any]:
        """
        Source principale de la clé OEM

        Returns:
            dict: Clés OA3xOriginalProductKey et OA3xOriginalProductKeyDescription
        """
        pass

    @abstractmethod
    def get_backup_product_key(self) -> Optional[str]:
        """
        Source secondaire de la clé OEM

        Returns:
            str: Clé de sauvegarde, ou None si absente
        """
        pass
