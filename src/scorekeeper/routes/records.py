"""History, statistics and data management routes."""

from xitzin import Redirect, Request, Xitzin

from ..engine.statistics import top_by_average, top_by_win_rate, top_players


def register_routes(app: Xitzin) -> None:
    """Register history and statistics routes."""

    @app.gemini("/history", name="history")
    def history(request: Request):
        """All games, newest first."""
        games = list(reversed(app.state.store.list()))
        return app.template(
            "history.gmi",
            games=[(game, top_players(game)) for game in games],
        )

    @app.input(
        "/history/{game_id}/delete",
        prompt="Delete this game? This cannot be undone. Type YES to confirm:",
        name="delete_game",
    )
    def delete_game(request: Request, game_id: str, query: str):
        if query.strip().upper() != "YES":
            return Redirect("/history")
        if app.state.store.remove(game_id):
            message = "Game deleted."
        else:
            message = "That game was not found."
        return app.template("message.gmi", title="Delete game", message=message)

    @app.gemini("/statistics", name="statistics")
    def statistics(request: Request):
        stats = app.state.store.statistics()
        return app.template(
            "statistics.gmi",
            total_games=stats.total_games,
            by_win_rate=top_by_win_rate(stats),
            by_average=top_by_average(stats),
        )

    @app.input(
        "/reset",
        prompt="Delete every game and statistic? Type YES to confirm:",
        name="reset_all",
    )
    def reset_all(request: Request, query: str):
        """Clear all stored data with confirmation."""
        if query.strip().upper() != "YES":
            return Redirect("/")
        app.state.drafts.clear()
        if app.state.store.clear():
            message = "All data cleared."
        else:
            message = "Data could not be cleared."
        return app.template("message.gmi", title="Reset", message=message)
