"""
Hostel service - Business logic layer for Hostel domain.
Services orchestrate repositories and contain business rules.
"""
from typing import List
from django.db import transaction
from core.context import OwnerContext
from core.dto import HostelDTO
from core.services import BaseService
from core.validators import RequiredFieldsValidator, CapacityValidator
from .models import Hostel
from .repositories import HostelRepository


class HostelService(BaseService):
    """Service for hostel-related business logic"""

    REQUIRED_FIELDS = ['name', 'address', 'contact', 'capacity']

    def __init__(self):
        super().__init__()
        self.hostel_repo = HostelRepository()

    def _validate(self, data: HostelDTO) -> dict:
        RequiredFieldsValidator.validate(vars(data), self.REQUIRED_FIELDS)
        return {
            'name': str(data.name).strip(),
            'address': str(data.address).strip(),
            'contact': str(data.contact).strip(),
            'capacity': CapacityValidator.validate_capacity(data.capacity, minimum=0),
        }

    def create_hostel(self, ctx: OwnerContext, data: HostelDTO) -> Hostel:
        """
        Create a new hostel.

        Raises:
            ValidationError: If a required field is missing or malformed
            StorageError: If the write fails
        """
        fields = self._validate(data)
        with transaction.atomic():
            hostel = self.hostel_repo.create(ctx, **fields)
        self.log_info(f"Hostel created: {hostel.name}", hostel_id=hostel.id, account_id=ctx.account_id)
        return hostel

    def list_hostels(self, ctx: OwnerContext) -> List[Hostel]:
        return list(self.hostel_repo.get_with_stats(ctx))

    def get_hostel(self, ctx: OwnerContext, hostel_id: int) -> Hostel:
        return self.hostel_repo.get_for_owner(ctx, hostel_id)

    def update_hostel(self, ctx: OwnerContext, hostel_id: int, data: HostelDTO) -> Hostel:
        fields = self._validate(data)
        hostel = self.hostel_repo.update(ctx, hostel_id, **fields)
        self.log_info(f"Hostel updated: {hostel.name}", hostel_id=hostel.id)
        return hostel

    def delete_hostel(self, ctx: OwnerContext, hostel_id: int) -> None:
        """Delete a hostel; its rooms stay, ungrouped"""
        self.hostel_repo.delete(ctx, hostel_id)
        self.log_info("Hostel deleted", hostel_id=hostel_id, account_id=ctx.account_id)
