"""
Re-expression of parameter values in another measurement scale.

A parameter is converted as a whole: its own value sets and the value sets of
every subscription on it are converted on clones, and the clones are staged
together with the scale update only when every slot converted. A value that
is not a number leaves the parameter untouched.
"""
import logging
import math
import re
from typing import List, Optional, Tuple

from cdp_batch_editor.model import UNSET, MeasurementScale, Parameter
from cdp_batch_editor.session.cache import ThingCache
from cdp_batch_editor.session.transaction import ThingTransaction, TransactionStager

logger = logging.getLogger(__name__)

# Multiplicative factors from a length scale to millimetre
CONVERSION_FACTORS_TO_MILLIMETRE = {
    "km": 1000000.0,
    "m": 1000.0,
    "dm": 100.0,
    "cm": 10.0,
    "mm": 1.0,
    "μm": 0.001,
    "nm": 0.000001,
}

CONVERTED_SLOTS = ("computed", "manual", "reference")

# Invariant-culture number: optional sign, ASCII digits, optional fraction and exponent
NUMBER_PATTERN = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?", re.ASCII)

# Converted values keep the precision of a double printed in invariant culture
SIGNIFICANT_DIGITS = 15


def format_invariant(value: float) -> str:
    rounded = float(format(value, f".{SIGNIFICANT_DIGITS}g"))
    if rounded.is_integer() and abs(rounded) < 1e16:
        return str(int(rounded))
    return format(rounded, f".{SIGNIFICANT_DIGITS}g")


def convert_numeric_value(old_value: Optional[str], conversion_factor: float) -> Tuple[str, bool]:
    """
    Multiplies a textual number by ``conversion_factor``.

    Returns the new text and whether the conversion succeeded. Unset and blank
    values convert to UNSET; a value that is not a finite number fails and is
    returned unchanged.
    """
    if old_value is None or not old_value.strip() or old_value == UNSET:
        return UNSET, True
    text = old_value.strip()
    if not NUMBER_PATTERN.fullmatch(text):
        return old_value, False
    converted = float(text) * conversion_factor
    if not math.isfinite(converted):
        return old_value, False
    return format_invariant(converted), True


def length_conversion_factor(old_scale: str, new_scale: str) -> Optional[float]:
    """Factor between two length scales, or None when either one is not a known length scale."""
    if old_scale not in CONVERSION_FACTORS_TO_MILLIMETRE or new_scale not in CONVERSION_FACTORS_TO_MILLIMETRE:
        return None
    return CONVERSION_FACTORS_TO_MILLIMETRE[old_scale] / CONVERSION_FACTORS_TO_MILLIMETRE[new_scale]


class ScaleConverter:
    def __init__(self, stager: TransactionStager, cache: ThingCache):
        self.stager = stager
        self.cache = cache
        self.error_count = 0

    def can_convert(self, parameter: Parameter, old_scale: MeasurementScale, new_scale: MeasurementScale) -> bool:
        parameter_type = self.cache.parameter_type_of(parameter)
        return (
            parameter_type is not None
            and parameter_type.is_quantity_kind
            and parameter.scale == old_scale.iid
            and new_scale.iid in parameter_type.possible_scales
        )

    def convert_parameter(
        self,
        element_short_name: str,
        parameter: Parameter,
        old_scale: MeasurementScale,
        new_scale: MeasurementScale,
        conversion_factor: float,
    ) -> bool:
        """
        Stages the conversion of ``parameter`` from ``old_scale`` to ``new_scale``.
        Returns True when the value sets and the scale update were staged.
        """
        if not self.can_convert(parameter, old_scale, new_scale):
            logger.debug(
                "Parameter %s cannot be converted from %s to %s",
                self.cache.user_friendly_short_name(parameter),
                old_scale.short_name,
                new_scale.short_name,
            )
            return False

        self.error_count = 0
        parameter_name = self.cache.user_friendly_short_name(parameter)
        owner = self.cache.short_name(parameter.owner)
        pending: List[ThingTransaction] = []

        for value_set in parameter.value_sets:
            if self.error_count:
                break
            pending.append(
                self._convert_value_set(
                    value_set, element_short_name, parameter_name, old_scale, new_scale,
                    conversion_factor, owner, is_subscription=False,
                )
            )

        for subscription in parameter.subscriptions:
            subscriber = self.cache.short_name(subscription.owner)
            for value_set in subscription.value_sets:
                if self.error_count:
                    break
                pending.append(
                    self._convert_value_set(
                        value_set, element_short_name, parameter_name, old_scale, new_scale,
                        conversion_factor, subscriber, is_subscription=True,
                    )
                )

        if self.error_count:
            logger.error(
                "In %s parameter \"%s\" keeps scale %s: %d value(s) cannot be converted, no change staged",
                element_short_name,
                parameter_name,
                old_scale.short_name,
                self.error_count,
            )
            return False

        for transaction in pending:
            self.stager.submit(transaction)
        self.stager.update(parameter, scale=new_scale.iid)
        return True

    def _convert_value_set(
        self,
        value_set,
        element_short_name: str,
        parameter_name: str,
        old_scale: MeasurementScale,
        new_scale: MeasurementScale,
        conversion_factor: float,
        owner_short_name: str,
        is_subscription: bool,
    ) -> ThingTransaction:
        transaction, clone = self.stager.prepare(value_set)
        ownership = "subscribed by" if is_subscription else "owned by"

        for slot in CONVERTED_SLOTS:
            values = getattr(clone, slot)
            if len(values) != 1 or self.error_count:
                continue

            old_value = values[0]
            new_value, succeeded = convert_numeric_value(old_value, conversion_factor)
            message = (
                f"In {element_short_name} parameter \"{parameter_name}\" ({ownership} {owner_short_name}) "
                f"value {old_value} {old_scale.short_name}"
            )
            if succeeded:
                values[0] = new_value
                logger.info("%s is converted to %s %s", message, new_value, new_scale.short_name)
            else:
                self.error_count += 1
                logger.error("%s cannot be converted", message)

        transaction.create_or_update(clone)
        return transaction
