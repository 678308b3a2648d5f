"""Database models."""
from hsa.models.user import User
from hsa.models.account import HSAAccount
from hsa.models.card import VirtualCard
from hsa.models.transaction import Transaction, TransactionType
from hsa.models.deposit import Deposit

__all__ = ["User", "HSAAccount", "VirtualCard", "Transaction", "TransactionType", "Deposit"]
