"""Tax computation services: validation, deductions, brackets and CSV batches."""

from .admin_service import AdminService
from .deduction_repository import InMemoryDeductionRepository
from .deductions import DeductionStore, clamp_allowance_amount, resolve_deduction_config
from .tax_service import TaxService

__all__ = [
    "AdminService",
    "DeductionStore",
    "InMemoryDeductionRepository",
    "TaxService",
    "clamp_allowance_amount",
    "resolve_deduction_config",
]
