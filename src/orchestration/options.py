"""
Normalization of stack create/update options.

Callers hand in options with snake_case keys. Parameters arrive either as a
mapping of key to value or as a list of ``{"parameter_key", "parameter_value"}``
records; both are normalized to the record list.
"""

from typing import Any, Dict, List, Mapping

# Keys whose provider spelling is not a plain CamelCase of the snake_case key
API_KEY_OVERRIDES = {
    "template_url": "TemplateURL",
    "notification_arns": "NotificationARNs",
    "role_arn": "RoleARN",
    "resource_types": "ResourceTypes",
    "stack_policy_url": "StackPolicyURL",
    "stack_policy_during_update_url": "StackPolicyDuringUpdateURL",
}


def _is_parameter_record(item: Any) -> bool:
    return isinstance(item, Mapping) and "parameter_key" in item


def format_parameters(parameters: Any) -> List[Dict[str, Any]]:
    """
    Normalize parameters to a list of parameter records.

    Raises:
        TypeError: If parameters are neither a mapping nor a list of records
    """
    if isinstance(parameters, Mapping):
        return [
            {"parameter_key": key, "parameter_value": value}
            for key, value in parameters.items()
        ]

    if isinstance(parameters, (list, tuple)):
        if all(_is_parameter_record(item) for item in parameters):
            return list(parameters)

    raise TypeError(
        "parameters must be a mapping or a list of "
        f"{{parameter_key, parameter_value}} records, got {parameters!r}"
    )


def format_options(options: Mapping[str, Any]) -> Dict[str, Any]:
    """Return options with parameters in canonical record form."""
    formatted = dict(options)
    if "parameters" in formatted:
        formatted["parameters"] = format_parameters(formatted["parameters"])
    return formatted


def _camelize(key: str) -> str:
    if key in API_KEY_OVERRIDES:
        return API_KEY_OVERRIDES[key]
    return "".join(part.capitalize() for part in key.split("_"))


def _api_tags(tags: Any) -> List[Dict[str, str]]:
    if isinstance(tags, Mapping):
        return [{"Key": key, "Value": value} for key, value in tags.items()]
    return [{"Key": tag["key"], "Value": tag["value"]} for tag in tags]


def to_api_params(options: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Convert canonical options into provider request keywords.

    Args:
        options: Options as returned by format_options

    Returns:
        Keyword arguments for the cloudformation client
    """
    params: Dict[str, Any] = {}

    for key, value in format_options(options).items():
        if value is None:
            continue

        if key == "parameters":
            params["Parameters"] = [
                {_camelize(k): v for k, v in record.items()} for record in value
            ]
        elif key == "tags":
            params["Tags"] = _api_tags(value)
        elif isinstance(value, (set, frozenset)):
            params[_camelize(key)] = sorted(value)
        else:
            params[_camelize(key)] = value

    return params
