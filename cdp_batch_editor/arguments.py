from enum import Enum
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from cdp_batch_editor.model import ParameterSwitchKind


class CommandEnumeration(str, Enum):
    UNSPECIFIED = "unspecified"
    ADD_PARAMETERS = "add-parameters"
    REMOVE_PARAMETERS = "remove-parameters"
    MOVE_REFERENCE_VALUES_TO_MANUAL_VALUES = "move-reference-values-to-manual-values"
    APPLY_OPTION_DEPENDENCE = "apply-option-dependence"
    APPLY_STATE_DEPENDENCE = "apply-state-dependence"
    CHANGE_PARAMETER_OWNERSHIP = "change-parameter-ownership"
    CHANGE_DOMAIN = "change-domain"
    REMOVE_OPTION_DEPENDENCE = "remove-option-dependence"
    REMOVE_STATE_DEPENDENCE = "remove-state-dependence"
    SET_GENERIC_OWNERS = "set-generic-owners"
    SET_SCALE = "set-scale"
    STANDARDIZE_DIMENSIONS_IN_MILLIMETER = "standardize-dimensions-in-millimeter"
    SET_SUBSCRIPTION_SWITCH = "set-subscription-switch"
    SUBSCRIBE = "subscribe"


ACTION_DESCRIPTIONS = {
    CommandEnumeration.UNSPECIFIED: "Do nothing (useful together with --report)",
    CommandEnumeration.ADD_PARAMETERS: "Add the --parameters to the selected element definitions",
    CommandEnumeration.REMOVE_PARAMETERS: "Remove the --parameters, optionally only those owned by --domain",
    CommandEnumeration.MOVE_REFERENCE_VALUES_TO_MANUAL_VALUES: "Move reference values into unset manual values",
    CommandEnumeration.APPLY_OPTION_DEPENDENCE: "Make the --parameters option dependent",
    CommandEnumeration.APPLY_STATE_DEPENDENCE: "Make the --parameters dependent on the --state list",
    CommandEnumeration.CHANGE_PARAMETER_OWNERSHIP: "Give the --parameters to the --domain",
    CommandEnumeration.CHANGE_DOMAIN: "Move everything owned by --domain to --to-domain",
    CommandEnumeration.REMOVE_OPTION_DEPENDENCE: "Make the --parameters option independent",
    CommandEnumeration.REMOVE_STATE_DEPENDENCE: "Remove the --state dependence of the --parameters",
    CommandEnumeration.SET_GENERIC_OWNERS: "Apply the prescribed ownership of generic equipment parameters",
    CommandEnumeration.SET_SCALE: "Assign the --scale to the --parameters",
    CommandEnumeration.STANDARDIZE_DIMENSIONS_IN_MILLIMETER: "Convert dimension parameters to millimetre",
    CommandEnumeration.SET_SUBSCRIPTION_SWITCH: "Set the --parameter-switch on the subscriptions of --domain",
    CommandEnumeration.SUBSCRIBE: "Subscribe --domain to the --parameters",
}


def split_short_names(value) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(",")
    return [item.strip() for item in value if item and item.strip()]


class CommandArguments(BaseModel):
    """Parsed arguments of one batch editor run."""
    source: Optional[Path] = None
    engineering_model: Optional[str] = None
    iteration: Optional[int] = None
    command: CommandEnumeration = CommandEnumeration.UNSPECIFIED
    selected_parameters: List[str] = Field(default_factory=list)
    filtered_categories: List[str] = Field(default_factory=list)
    element_definition: Optional[str] = None
    included_owners: List[str] = Field(default_factory=list)
    excluded_owners: List[str] = Field(default_factory=list)
    domain_of_expertise: Optional[str] = None
    to_domain_of_expertise: Optional[str] = None
    state_list_name: Optional[str] = None
    parameter_switch_kind: Optional[ParameterSwitchKind] = None
    parameter_group: Optional[str] = None
    scale: Optional[str] = None
    report: bool = False
    report_dir: Path = Path(".")
    dry_run: bool = False

    @field_validator(
        "selected_parameters",
        "filtered_categories",
        "included_owners",
        "excluded_owners",
        mode="before",
    )
    @classmethod
    def _split(cls, value):
        return split_short_names(value)

    @field_validator("parameter_switch_kind", mode="before")
    @classmethod
    def _upper_switch(cls, value):
        if isinstance(value, str):
            return value.strip().upper() or None
        return value

    def describe(self) -> str:
        pairs = []
        for name in type(self).model_fields:
            value = getattr(self, name)
            if isinstance(value, Enum):
                display = value.value
            elif isinstance(value, list):
                display = ",".join(value)
            elif value is None:
                display = ""
            else:
                display = str(value)
            pairs.append(f'--{name.replace("_", "-")}="{display}"')
        return " ".join(sorted(pairs))
