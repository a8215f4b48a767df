"""
Presale error types.

Every failure of the state machine is one of these. Each carries a stable `code`
that callers can match on, a human-readable message and the HTTP status the API
layer answers with. Raising any of them aborts the whole operation; the service
rolls back every write made before the failure.
"""
from typing import Optional


class PresaleError(Exception):
    """Base class for all presale failures."""
    code: str = "PresaleError"
    message: str = "Presale operation failed"
    status_code: int = 400

    def __init__(self, message: Optional[str] = None, **context):
        self.detail = message or self.message
        self.context = context
        super().__init__(self.detail)

    def to_dict(self) -> dict:
        return {"error": self.code, "detail": self.detail}


# Round lookup and authorization

class InvalidId(PresaleError):
    code = "InvalidId"
    message = "Invalid presale id"
    status_code = 404


class NotOwner(PresaleError):
    code = "NotOwner"
    message = "Caller is not the owner"
    status_code = 403


# Round configuration

class InvalidTime(PresaleError):
    code = "InvalidTime"
    message = "Invalid time"


class InvalidParams(PresaleError):
    code = "InvalidParams"
    message = "Invalid parameters"


class SaleTimeInPast(PresaleError):
    code = "SaleTimeInPast"
    message = "Sale time in past"


class SaleAlreadyStarted(PresaleError):
    code = "SaleAlreadyStarted"
    message = "Sale already started"


class SaleAlreadyEnded(PresaleError):
    code = "SaleAlreadyEnded"
    message = "Sale already ended"


class InvalidEndTime(PresaleError):
    code = "InvalidEndTime"
    message = "Invalid endTime"


class ZeroPrice(PresaleError):
    code = "ZeroPrice"
    message = "Zero price"


class ZeroTokens(PresaleError):
    code = "ZeroTokens"
    message = "Zero tokens to sell"


class ZeroDecimals(PresaleError):
    code = "ZeroDecimals"
    message = "Zero decimals for the token"


class ZeroAddress(PresaleError):
    code = "ZeroAddress"
    message = "Zero token address"


class VestingBeforeEnd(PresaleError):
    code = "VestingBeforeEnd"
    message = "Vesting starts before Presale ends"


class AlreadyPaused(PresaleError):
    code = "AlreadyPaused"
    message = "Already paused"


class NotPaused(PresaleError):
    code = "NotPaused"
    message = "Not paused"


# Purchases

class Paused(PresaleError):
    code = "Paused"
    message = "Presale paused"


class BuyDisabled(PresaleError):
    code = "BuyDisabled"
    message = "Not allowed to buy with this currency"


class ZeroAmount(PresaleError):
    code = "ZeroAmount"
    message = "Invalid sale amount"


class ExceedsAvailable(PresaleError):
    code = "ExceedsAvailable"
    message = "Invalid sale amount"


class InsufficientAllowance(PresaleError):
    code = "InsufficientAllowance"
    message = "Make sure to add enough allowance"


class InsufficientPayment(PresaleError):
    code = "InsufficientPayment"
    message = "Less payment"


class PaymentFailed(PresaleError):
    code = "PaymentFailed"
    message = "Payment failed"


class OracleError(PresaleError):
    code = "OracleError"
    message = "Invalid oracle price"
    status_code = 502


# Claims

class NothingToClaim(PresaleError):
    code = "NothingToClaim"
    message = "Nothing to claim"


class SaleTokenUnset(PresaleError):
    code = "SaleTokenUnset"
    message = "Presale token address not set"


class ZeroClaimAmount(PresaleError):
    code = "ZeroClaimAmount"
    message = "Zero claim amount"


class AlreadyClaimed(PresaleError):
    code = "AlreadyClaimed"
    message = "Already claimed"


class InsufficientContractBalance(PresaleError):
    code = "InsufficientContractBalance"
    message = "Not enough tokens in the contract"


class TransferFailed(PresaleError):
    code = "TransferFailed"
    message = "Token transfer failed"


class EmptyUserList(PresaleError):
    code = "EmptyUserList"
    message = "Zero users length"
