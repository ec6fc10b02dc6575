# Services module

from stockapi.services.auth_service import AuthService
from stockapi.services.product_service import ProductService
from stockapi.services.stock_ledger_service import HistoryPage, StockLedgerService
from stockapi.services.errors import (
    AuthenticationFailed,
    DuplicateBarcode,
    EmailAlreadyRegistered,
    InsufficientStock,
    InvalidInput,
    NotFound,
    PersistenceFailure,
    ProductInactive,
    ServiceError,
    VerificationFailed,
)
