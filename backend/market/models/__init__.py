from .auth import User
from .catalog import Product
from .sales import Transaction, TransactionSequence

__all__ = [
    'User',
    'Product',
    'Transaction', 'TransactionSequence',
]
