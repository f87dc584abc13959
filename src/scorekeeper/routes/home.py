"""Home page route."""

from xitzin import Request, Xitzin

from ..engine.statistics import compute_statistics, recent_games


def register_routes(app: Xitzin) -> None:
    """Register home routes."""

    @app.gemini("/", name="home")
    def home(request: Request):
        games = app.state.store.list()
        statistics = compute_statistics(games)
        return app.template(
            "home.gmi",
            recent=recent_games(games),
            total_games=statistics.total_games,
            players=len(statistics.player_stats),
        )
