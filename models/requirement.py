"""Requirement and link classes joining tasks and assets to coverage."""

from typing import Optional


class Requirement:
    """
    A maintenance task required (or recommended) by a contract or warranty.

    Exactly one of contract_id / warranty_id is set.
    """

    def __init__(
            self,
            maintenance_task_id: str,
            id: Optional[str] = None,
            contract_id: Optional[str] = None,
            warranty_id: Optional[str] = None,
            is_required: bool = True,
            requirement_description: Optional[str] = None,
            consequence_if_missed: Optional[str] = None,
            is_compliant: Optional[bool] = None,
    ):
        self.id = id
        self.maintenance_task_id = maintenance_task_id
        self.contract_id = contract_id
        self.warranty_id = warranty_id
        self.is_required = True if is_required is None else is_required
        self.requirement_description = requirement_description
        self.consequence_if_missed = consequence_if_missed
        self.is_compliant = is_compliant


class AssetLink:
    """Coverage of an asset by a warranty or service contract."""

    def __init__(
            self,
            asset_id: str,
            id: Optional[str] = None,
            warranty_id: Optional[str] = None,
            contract_id: Optional[str] = None,
    ):
        self.id = id
        self.asset_id = asset_id
        self.warranty_id = warranty_id
        self.contract_id = contract_id

    @property
    def coverage_id(self) -> Optional[str]:
        return self.warranty_id or self.contract_id
