"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidPriceError(DomainException):
    """Price string could not be parsed into an amount"""

    pass


class InvalidFinanceTermError(DomainException):
    """Loan term must be a positive number of months"""

    pass


class InvalidDepositError(DomainException):
    """Deposit percentage outside the allowed 0-50 range"""

    pass


class UnknownPaymentOptionError(DomainException):
    """Requested term/APR pair is not in the finance catalog"""

    pass


class DateNotSelectableError(DomainException):
    """Install date is unavailable, full, or a Sunday"""

    pass


class PaymentGatewayError(DomainException):
    """Payment gateway returned an error or is unavailable"""

    pass


class PaymentGatewayNotConfiguredError(PaymentGatewayError):
    """No secret key configured for the payment gateway"""

    pass


class PaymentGatewayAuthError(PaymentGatewayError):
    """Payment gateway rejected the configured secret key"""

    pass
