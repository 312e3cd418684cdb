"""Comments plugin used by the test suite."""

from plugwire.plugins import Plugin


class CommentsPlugin(Plugin):
    name = "comments"
    version = "0.3.0"

    def boot(self) -> None:
        self.enable_config("config.json")
        self.enable_config("shared.json", key="shared")
        self.enable_migrations()
