"""Plugin whose routes file does not exist."""

from plugwire.plugins import Plugin


class BrokenPlugin(Plugin):
    name = "broken"

    def boot(self) -> None:
        self.enable_routes("missing_routes.py")


class NamelessPlugin(Plugin):
    def boot(self) -> None:
        pass
