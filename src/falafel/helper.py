"""Helper functionality that is used in other modules of this package."""

from __future__ import annotations


def lower_case(name: str) -> str:
    """Lower the first character of a name.

    E.g. `GetInfo` becomes `getInfo`.

    Args:
        name (str): The original name.

    Returns:
        str: The name with a lower-case first character.
    """
    if not name:
        return ""

    return name[:1].lower() + name[1:]


def upper_case(name: str) -> str:
    """Raise the first character of a name.

    E.g. `lightning` becomes `Lightning`.

    Args:
        name (str): The original name.

    Returns:
        str: The name with an upper-case first character.
    """
    if not name:
        return ""

    return name[:1].upper() + name[1:]


def strip_leading_dot(type_name: str) -> str:
    """Remove the leading dot of a fully qualified protobuf type name.

    Descriptors reference types as `.lnrpc.GetInfoRequest`; the generated code needs `lnrpc.GetInfoRequest`.

    Args:
        type_name (str): The fully qualified type name.

    Returns:
        str: The type name without the leading dot.
    """
    return type_name.removeprefix(".")


def strip_package(type_name: str, package: str) -> str:
    """Drop the package qualifier from a type that lives in `package`.

    E.g. `lnrpc.GetInfoRequest` becomes `GetInfoRequest` for the package `lnrpc`, while
    `invoicesrpc.AddInvoiceRequest` is returned unchanged.

    Args:
        type_name (str): The type name, without leading dot.
        package (str): The package the generated code lives in.

    Returns:
        str: The type name, relative to `package` where possible.
    """
    if package:
        return type_name.removeprefix(f"{package}.")

    return type_name


def last_path_segment(import_path: str) -> str:
    """The final segment of a slash separated import path.

    E.g. `github.com/lightningnetwork/lnd/lnrpc` becomes `lnrpc`.
    """
    return import_path.rsplit("/", 1)[-1]
