"""
Collecteurs de licences Windows

Ce module collecte :
- Les produits sous licence (SoftwareLicensingProduct)
- La clé produit OEM OA3x, avec repli sur la clé de sauvegarde du registre
"""

from typing import Any, Dict

from .base import BaseCollector
from ..core.models import (
    CollectionResult,
    ERROR,
    LicensedProduct,
    NOT_AVAILABLE,
    NOT_FOUND,
    OEMProductKeyInfo,
)

PRIMARY_SOURCE = "SoftwareLicensingService"
SECONDARY_SOURCE = "registry (BackupProductKeyDefault)"


class LicensedProductCollector(BaseCollector):
    description = "les produits sous licence"

    def collect(self) -> CollectionResult:
        result = self._safe_execute(self.source.get_licensed_products, [])
        if result.ok:
            result.value = [self._build_product(raw) for raw in (result.value or [])]
            self.logger.debug(f"{len(result.value)} produit(s) sous licence trouvé(s)")
        return result

    def _build_product(self, raw: Dict[str, Any]) -> LicensedProduct:
        return LicensedProduct(
            name=self._clean_string(raw.get('Name')),
            description=self._clean_string(raw.get('Description')),
            license_status=self._to_int(raw.get('LicenseStatus')),
            partial_product_key=self._clean_string(raw.get('PartialProductKey')),
            license_family=self._clean_string(raw.get('LicenseFamily')),
            product_key_channel=self._clean_string(raw.get('ProductKeyChannel')),
            is_key_management_service_machine=self._to_int(raw.get('IsKeyManagementServiceMachine')),
        )


class OemProductKeyCollector(BaseCollector):
    """
    Collecteur de la clé produit OEM

    Ordre de recherche :
    1. SoftwareLicensingService (source principale)
    2. Clé BackupProductKeyDefault du registre, si la source principale
       ne fournit pas de clé
    Une exception de la source principale donne directement le résultat
    "Error", sans consulter la source secondaire.
    """

    description = "la clé produit OEM"

    def collect(self) -> CollectionResult:
        try:
            primary = self.source.get_oa3x_product_key() or {}
            key = self._key_or_none(primary.get('OA3xOriginalProductKey'))
            if key:
                return CollectionResult(OEMProductKeyInfo(
                    product_key=key,
                    description=self._clean_string(primary.get('OA3xOriginalProductKeyDescription')),
                    result=f"OA3x Original Product Key retrieved successfully from {PRIMARY_SOURCE}",
                ))

            key = self._key_or_none(self.source.get_backup_product_key())
            if key:
                return CollectionResult(OEMProductKeyInfo(
                    product_key=key,
                    description=NOT_AVAILABLE,
                    result=f"OA3x Original Product Key retrieved successfully from {SECONDARY_SOURCE}",
                ))

            message = f"OA3x Original Product Key not found in {PRIMARY_SOURCE} or registry"
            return self._warn(message, OEMProductKeyInfo(
                product_key=NOT_FOUND,
                description=NOT_AVAILABLE,
                result=message,
            ))

        except Exception as e:
            message = f"Error retrieving OA3x Original Product Key: {e}"
            return self._warn(message, OEMProductKeyInfo(
                product_key=ERROR,
                description=NOT_AVAILABLE,
                result=message,
            ))

    @staticmethod
    def _key_or_none(value: Any):
        if value is None:
            return None
        value = str(value).strip()
        return value or None
