"""Articles plugin used by the test suite."""

from plugwire.plugins import Plugin


class ArticlesPlugin(Plugin):
    name = "articles"
    version = "1.2.0"
    description = "Articles with a listing page"

    def boot(self) -> None:
        self.enable_config()
        self.enable_config("shared.yaml", key="shared")
        self.enable_routes(prefix="/articles")
        self.enable_views()
        self.enable_migrations(["migrations", "archive"])
