from __future__ import annotations

from typing import Optional

from app.schemas.base import RequestModel, VendorModel


class Address(VendorModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    company: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    country: Optional[str] = None
    phone_number: Optional[str] = None
    fax_number: Optional[str] = None


class CreditCard(VendorModel):
    card_number: Optional[str] = None
    expiration_date: Optional[str] = None
    card_type: Optional[str] = None


class BankAccount(VendorModel):
    account_type: Optional[str] = None
    routing_number: Optional[str] = None
    account_number: Optional[str] = None
    name_on_account: Optional[str] = None
    echeck_type: Optional[str] = None
    bank_name: Optional[str] = None


class Payment(VendorModel):
    credit_card: Optional[CreditCard] = None
    bank_account: Optional[BankAccount] = None

    @property
    def kind(self) -> Optional[str]:
        if self.credit_card is not None:
            return "creditCard"
        if self.bank_account is not None:
            return "bankAccount"
        return None


class PaymentProfile(VendorModel):
    customer_payment_profile_id: Optional[str] = None
    bill_to: Optional[Address] = None
    payment: Optional[Payment] = None
    default_payment_profile: Optional[bool] = None

    def describe(self) -> str:
        """Short label for lists; numbers are already masked by the processor."""
        if self.payment is not None and self.payment.credit_card is not None:
            number = self.payment.credit_card.card_number or ""
            return f"Card ending in {number[-4:] if len(number) >= 4 else '****'}"
        if self.payment is not None and self.payment.bank_account is not None:
            return "Bank Account"
        return "Payment Method"


class PaymentProfileNameUpdate(RequestModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
