from decimal import Decimal
from typing import Iterable, Optional

from django import forms
from django.utils.translation import gettext_lazy as _

from offramp import settings
from offramp.amounts import decimal_to_text, format_amount, strip_grouping
from offramp.constraints import AssetConstraint
from offramp.currencies import CurrencyCatalog


def display_amount(value: Decimal) -> str:
    return format_amount(decimal_to_text(value))


class GroupedDecimalField(forms.DecimalField):
    """A ``DecimalField`` that accepts comma-grouped input such as ``1,234.5``."""

    def to_python(self, value):
        if isinstance(value, str):
            value = strip_grouping(value.strip())
        return super().to_python(value)


class SwapForm(forms.Form):
    """
    Validates a swap before it is submitted.

    The :attr:`amount_sent` field is checked against the bounds of the
    :class:`~offramp.constraints.AssetConstraint` resolved for the selected
    token and, when `balance` is passed, against the user's balance.
    :attr:`amount_received` is never checked against bounds, it is derived from
    :attr:`amount_sent` through the rate.

    :attr:`amount_sent` is disabled until a token is selected, and
    :attr:`amount_received` until both a token and a currency are selected.
    """

    def __init__(
        self,
        constraint: AssetConstraint,
        currencies: CurrencyCatalog,
        tokens: Iterable[str],
        balance: Optional[Decimal] = None,
        *args,
        **kwargs,
    ):
        super().__init__(*args, **kwargs)

        self.constraint = constraint
        self.balance = balance
        self.min_amount = constraint.min_send
        self.max_amount = constraint.max_send
        self.send_places = settings.SEND_DECIMAL_PLACES
        self.receive_places = settings.RECEIVE_DECIMAL_PLACES

        self.fields["token"].choices = [("", "")] + [(t, t) for t in tokens]
        self.fields["currency"].choices = [("", "")] + [
            (e.code, e.label) for e in currencies if not e.disabled
        ]

        token = self.data.get("token") if self.is_bound else self.initial.get("token")
        currency = (
            self.data.get("currency") if self.is_bound else self.initial.get("currency")
        )

        # Re-initialize the amount fields now that the bounds are known
        self.fields["amount_sent"].__init__(
            widget=forms.TextInput(
                attrs={
                    "class": "offramp-amount-sent",
                    "inputmode": "decimal",
                    "placeholder": "0",
                }
            ),
            decimal_places=self.send_places,
            disabled=not token,
            label=_("Send"),
            error_messages={
                "required": _("Amount is required"),
                "max_decimal_places": _("Maximum %s decimal places allowed")
                % self.send_places,
            },
        )
        self.fields["amount_received"].__init__(
            widget=forms.TextInput(
                attrs={
                    "class": "offramp-amount-received",
                    "inputmode": "decimal",
                    "placeholder": "0",
                }
            ),
            required=False,
            decimal_places=self.receive_places,
            disabled=not (token and currency),
            label=_("Receive"),
            error_messages={
                "max_decimal_places": _("Maximum %s decimal places allowed")
                % self.receive_places,
            },
        )

    token = forms.ChoiceField(label=_("Token"))
    currency = forms.ChoiceField(label=_("Currency"))
    amount_sent = GroupedDecimalField()
    amount_received = GroupedDecimalField()
    memo = forms.CharField(required=False, label=_("Description"))

    def clean_amount_sent(self):
        """Validate the amount against the asset's bounds and the balance."""
        amount = self.cleaned_data["amount_sent"]
        if amount < self.min_amount:
            raise forms.ValidationError(
                _("Minimum amount is %s") % display_amount(self.min_amount)
            )
        elif amount > self.max_amount:
            raise forms.ValidationError(
                _("Maximum amount is %s") % display_amount(self.max_amount)
            )
        elif self.balance is not None and amount > self.balance:
            raise forms.ValidationError(_("Insufficient balance"))
        return amount
