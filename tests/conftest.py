# Fixtures from the domscreen pytest plugin, available without installing the package.
from domscreen.pytest_plugin import dom_config, dom_expect, dom_lifecycle, dom_session  # noqa: F401
