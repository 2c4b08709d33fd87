"""Parsing of the plugin parameter string into a typed generation config.

protoc hands plugin options over as one flat string, e.g.

    package_name=lndmobile,target_package=github.com/lightningnetwork/lnd/lnrpc,listeners=lightning=lightningLis

The `listeners` value is itself a space separated list of `service=listener` pairs.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from falafel.errors import ConfigurationError
from falafel.helper import last_path_segment

logger = logging.getLogger(__name__)

ENABLED = "1"

KNOWN_KEYS = frozenset(
    {
        "package_name",
        "target_package",
        "listeners",
        "defaultlistener",
        "build_tags",
        "api_prefix",
        "js_stubs",
        "manual_import",
        "mem_rpc",
    }
)


def parse_parameters(parameter: str, delimiter: str = ",") -> dict[str, str]:
    """Split a parameter string into a mapping of keys to values.

    Tokens without `=` map to an empty string, and only the first `=` of a token separates key and value.
    This never fails: any input produces a mapping.

    Args:
        parameter (str): The raw parameter string.
        delimiter (str, optional): The token delimiter. Defaults to ",".

    Returns:
        dict[str, str]: The parsed parameters.
    """
    params: dict[str, str] = {}
    if not parameter:
        return params

    for token in parameter.split(delimiter):
        key, _, value = token.partition("=")
        params[key] = value

    return params


@dataclass(frozen=True)
class GenerationConfig:
    """All settings that steer a generation run.

    Attributes:
        package_name: Go package of the generated files.
        target_package: Import path of the gRPC package the stubs wrap. Only required for mobile stubs.
        target_name: Final segment of `target_package`, used to reference its types.
        listeners: Lower-cased service name to listener identifier.
        default_listener: Listener for services that are not in `listeners`.
        build_tags: Build constraint placed in the generated headers.
        api_prefix: Prefix generated mobile functions with the service name.
        js_stubs: Generate JSON stubs instead of mobile stubs.
        manual_import: Extra import line for JSON stubs.
        mem_rpc: Also generate the in-memory RPC scaffolding.
    """

    package_name: str
    target_package: str = ""
    target_name: str = ""
    listeners: dict[str, str] = field(default_factory=dict)
    default_listener: str = ""
    build_tags: str = ""
    api_prefix: bool = False
    js_stubs: bool = False
    manual_import: str = ""
    mem_rpc: bool = False

    @classmethod
    def from_parameter(cls, parameter: str) -> GenerationConfig:
        """Parse and validate a raw plugin parameter string.

        Args:
            parameter (str): The raw parameter string.

        Raises:
            ConfigurationError: Lists every required key that is missing.

        Returns:
            GenerationConfig: The validated config.
        """
        return cls.from_mapping(parse_parameters(parameter))

    @classmethod
    def from_mapping(cls, params: dict[str, str]) -> GenerationConfig:
        """Build the config from already parsed parameters.

        `package_name` is always required, `target_package` only when generating mobile stubs.

        Args:
            params (dict[str, str]): Parameters as returned by `parse_parameters`.

        Raises:
            ConfigurationError: Lists every required key that is missing.

        Returns:
            GenerationConfig: The validated config.
        """
        for key in sorted(params.keys() - KNOWN_KEYS):
            logger.debug("Ignoring unknown parameter '%s'.", key)

        js_stubs = params.get("js_stubs") == ENABLED
        package_name = params.get("package_name", "")
        target_package = params.get("target_package", "")

        missing = []
        if not package_name:
            missing.append("package_name")
        if not js_stubs and not target_package:
            missing.append("target_package")
        if missing:
            raise ConfigurationError(missing)

        return cls(
            package_name=package_name,
            target_package=target_package,
            target_name=last_path_segment(target_package) if target_package else "",
            listeners=parse_parameters(params.get("listeners", ""), " "),
            default_listener=params.get("defaultlistener", ""),
            build_tags=params.get("build_tags", ""),
            api_prefix=params.get("api_prefix") == ENABLED,
            js_stubs=js_stubs,
            manual_import=params.get("manual_import", ""),
            mem_rpc=params.get("mem_rpc") == ENABLED,
        )
