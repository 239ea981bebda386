"""Input loading.

Reads PublishInputs from the process environment and turns pydantic
validation failures into ConfigurationError naming the variable.
"""

from pydantic import ValidationError as PydanticValidationError

from nuget_publish.config.models import ENV_NAMES, PublishInputs
from nuget_publish.exceptions import ConfigurationError


def _describe(error: dict) -> str:
    loc = error.get("loc") or ()
    key = str(loc[0]) if loc else ""
    # Alias locs arrive as the matched environment key
    env_name = ENV_NAMES.get(key) or key.upper().removeprefix("INPUT_")
    msg = str(error.get("msg", "")).removeprefix("Value error, ")
    if env_name and env_name not in msg:
        return f"{env_name}: {msg}"
    return msg


def load_inputs() -> PublishInputs:
    """Load publish inputs from the environment.

    INPUT_<NAME> takes precedence over <NAME> for every input.

    Returns:
        Parsed PublishInputs

    Raises:
        ConfigurationError: If an input cannot be parsed
    """
    try:
        return PublishInputs()
    except PydanticValidationError as e:
        errors = e.errors()
        raise ConfigurationError(
            _describe(errors[0]),
            details="\n".join(_describe(err) for err in errors[1:]) or None,
            fix_hint="Check the input values; boolean inputs must be JSON true or false",
        ) from e
