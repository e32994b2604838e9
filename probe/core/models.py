"""
Modèles de données de la sonde d'inventaire

Chaque enregistrement porte tous ses champs en permanence : une valeur
absente est remplacée par une sentinelle ("N/A", "Not Found", "Error" ou
liste vide), jamais par None.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

NOT_AVAILABLE = "N/A"
NOT_FOUND = "Not Found"
ERROR = "Error"

LICENSE_STATUS_DESCRIPTIONS = {
    0: "Unlicensed",
    1: "Licensed",
    2: "Initial Grace Period",
    3: "Additional Grace Period",
    4: "Non-Genuine Grace Period",
    5: "Notification",
    6: "Extended Grace Period",
}

UNKNOWN_STATUS = "Unknown Status"


def status_description(code: Any) -> str:
    """
    Traduit un code LicenseStatus en libellé

    Args:
        code: Code de statut (entier 0-6 attendu)

    Returns:
        str: Libellé du statut, "Unknown Status" pour toute autre valeur
    """
    # bool est un sous-type d'int : True ne doit pas valoir "Licensed"
    if isinstance(code, bool) or not isinstance(code, int):
        return UNKNOWN_STATUS
    return LICENSE_STATUS_DESCRIPTIONS.get(code, UNKNOWN_STATUS)


@dataclass
class CollectionResult:
    """Résultat d'un collecteur : la valeur et un avertissement éventuel"""
    value: Any
    warning: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.warning is None


@dataclass(frozen=True)
class HostIdentity:
    hostname: str = NOT_AVAILABLE
    serial_number: str = NOT_AVAILABLE


@dataclass
class OperatingSystemInfo:
    caption: str = NOT_AVAILABLE
    version: str = NOT_AVAILABLE
    architecture: str = NOT_AVAILABLE
    build_number: str = NOT_AVAILABLE

    def to_dict(self) -> Dict[str, str]:
        return {
            'Caption': self.caption,
            'Version': self.version,
            'OSArchitecture': self.architecture,
            'BuildNumber': self.build_number,
        }


@dataclass
class OfficeInstallation:
    display_name: str = NOT_AVAILABLE
    display_version: str = NOT_AVAILABLE
    publisher: str = NOT_AVAILABLE
    install_date: str = NOT_AVAILABLE

    def to_dict(self) -> Dict[str, str]:
        return {
            'DisplayName': self.display_name,
            'DisplayVersion': self.display_version,
            'Publisher': self.publisher,
            'InstallDate': self.install_date,
        }


@dataclass
class LicensedProduct:
    name: str = NOT_AVAILABLE
    description: str = NOT_AVAILABLE
    license_status: Union[int, str] = NOT_AVAILABLE
    partial_product_key: str = NOT_AVAILABLE
    license_family: str = NOT_AVAILABLE
    product_key_channel: str = NOT_AVAILABLE
    is_key_management_service_machine: Union[int, str] = NOT_AVAILABLE

    @property
    def status_description(self) -> str:
        return status_description(self.license_status)

    def to_dict(self) -> Dict[str, Any]:
        """
        Représentation exportée, avec le libellé du statut calculé à la volée

        Returns:
            dict: Champs du produit dans l'ordre des colonnes exportées
        """
        return {
            'Name': self.name,
            'Description': self.description,
            'LicenseStatus': self.license_status,
            'LicenseStatusDescription': self.status_description,
            'PartialProductKey': self.partial_product_key,
            'LicenseFamily': self.license_family,
            'ProductKeyChannel': self.product_key_channel,
            'IsKeyManagementServiceMachine': self.is_key_management_service_machine,
        }


@dataclass
class OEMProductKeyInfo:
    product_key: str = NOT_FOUND
    description: str = NOT_AVAILABLE
    result: str = NOT_AVAILABLE

    def to_dict(self) -> Dict[str, str]:
        return {
            'OA3xOriginalProductKey': self.product_key,
            'OA3xOriginalProductKeyDescription': self.description,
            'OA3xOriginalProductKeyResult': self.result,
        }


@dataclass
class EndpointReport:
    """
    Rapport complet d'un poste

    Assemblé une seule fois par exécution, puis consommé par l'exporteur.
    """
    identity: HostIdentity = field(default_factory=HostIdentity)
    operating_system: OperatingSystemInfo = field(default_factory=OperatingSystemInfo)
    installed_office: List[OfficeInstallation] = field(default_factory=list)
    licensed_products: List[LicensedProduct] = field(default_factory=list)
    oem_product_key: OEMProductKeyInfo = field(default_factory=OEMProductKeyInfo)

    @property
    def hostname(self) -> str:
        return self.identity.hostname

    @property
    def serial_number(self) -> str:
        return self.identity.serial_number

    def to_dict(self) -> Dict[str, Any]:
        return {
            'Hostname': self.hostname,
            'SerialNumber': self.serial_number,
            'OperatingSystem': self.operating_system.to_dict(),
            'InstalledOffice': [office.to_dict() for office in self.installed_office],
            'LicensedProducts': [product.to_dict() for product in self.licensed_products],
            'OEMProductKey': self.oem_product_key.to_dict(),
        }
