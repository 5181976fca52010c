"""
Asset ledger services.
"""

from typing import List

from app.modules.assets.models import Asset, AssetStatus
from app.modules.assets.schemas import AssetCreate, AssetUpdate
from app.shared.models.audit import AuditResource
from app.shared.repository import SqlAlchemyOwnedRepository


class AssetRepository(SqlAlchemyOwnedRepository[Asset]):
    model = Asset
    create_schema = AssetCreate
    update_schema = AssetUpdate
    resource = AuditResource.ASSET
    label = "asset"
    required_fields = ("category", "institution", "account_number", "current_value", "status", "documents")

    def list_active(self, owner_id: int) -> List[Asset]:
        """Active holdings only, newest first. These are what count towards net worth."""
        return (
            self.db.query(Asset)
            .filter(Asset.user_id == owner_id, Asset.status == AssetStatus.ACTIVE)
            .order_by(Asset.created_at.desc(), Asset.id.desc())
            .all()
        )
