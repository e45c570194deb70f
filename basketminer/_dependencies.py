from __future__ import annotations

import importlib
import types

# optional packages and the extra of this package that installs them
_EXTRAS = {
    "polars": "polars",
}


def import_optional_dependency(name: str) -> types.ModuleType:
    """Import *name*, a package only some features of basketminer need.

    Raises
    ------
    ImportError
        If the package is not installed.  The message names the extra that
        pulls it in.
    """
    try:
        return importlib.import_module(name)
    except ModuleNotFoundError as exc:
        package_name = name.split(".")[0]
        extra = _EXTRAS.get(package_name, package_name)
        raise ImportError(
            f"Missing optional dependency '{package_name}'. "
            f"Install it with `pip install {package_name}` or `pip install basketminer[{extra}]`."
        ) from exc
