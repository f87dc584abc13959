"""Game setup and scoring routes."""

from xitzin import Redirect, Request, Xitzin

from ..engine.rules import split_names
from ..engine.statistics import top_players
from ..errors import GameCompletedError, NoRoundsPlayedError, ValidationError
from ..session import ScoreSession


def _load_game(request: Request, game_id: str) -> ScoreSession | None:
    """An unsaved draft if there is one, otherwise the stored game."""
    draft = request.app.state.drafts.get(game_id)
    if draft is not None:
        return draft
    return ScoreSession.resume(request.app.state.store, game_id)


def _with_save_note(message: str, saved: bool) -> str:
    if saved:
        return message
    return f"{message} It could not be saved."


def _render_game(app: Xitzin, game: ScoreSession, message: str = ""):
    """Render the scoring view."""
    return app.template(
        "game.gmi",
        game=game.game,
        standings=top_players(game.game, limit=len(game.game.players)),
        message=message,
    )


def _render_missing(app: Xitzin, game_id: str):
    return app.template(
        "message.gmi",
        title="Game not found",
        message=f"There is no game called {game_id}.",
    )


def _register_setup_routes(app: Xitzin) -> None:
    """Register the new game route."""

    @app.input(
        "/new",
        prompt="Player names, separated by commas (2 to 8 players):",
        name="new_game",
    )
    def new_game(request: Request, query: str):
        """Start a game from a roster."""
        try:
            game = ScoreSession.start(app.state.store, split_names(query))
        except ValidationError as exc:
            return app.template("message.gmi", title="Cannot start game", message=str(exc))
        app.state.drafts.add(game)
        return _render_game(app, game, message="Game started. Enter the first round.")


def _register_scoring_routes(app: Xitzin) -> None:
    """Register the routes that change a game."""

    @app.gemini("/game/{game_id}", name="game")
    def show_game(request: Request, game_id: str):
        """Current standings."""
        game = _load_game(request, game_id)
        if game is None:
            return _render_missing(app, game_id)
        return _render_game(app, game)

    @app.input(
        "/game/{game_id}/round",
        prompt="Round scores in player order, separated by spaces:",
        name="add_round",
    )
    def add_round(request: Request, game_id: str, query: str):
        """Apply one round of scores."""
        game = _load_game(request, game_id)
        if game is None:
            return _render_missing(app, game_id)
        try:
            saved = game.add_round(query)
        except ValidationError as exc:
            return _render_game(app, game, message=f"Missing scores: {exc}")
        except GameCompletedError:
            return _render_game(app, game, message="The game is over.")
        if saved:
            app.state.drafts.pop(game_id)
        message = f"Round {game.game.total_rounds} recorded."
        return _render_game(app, game, message=_with_save_note(message, saved))

    @app.gemini("/game/{game_id}/finish", name="finish_game")
    def finish(request: Request, game_id: str):
        """Complete the game and announce the winner."""
        game = _load_game(request, game_id)
        if game is None:
            return _render_missing(app, game_id)
        try:
            saved = game.finish()
        except NoRoundsPlayedError as exc:
            return _render_game(app, game, message=str(exc))
        except GameCompletedError:
            return _render_game(app, game, message="The game is over.")
        message = f"Congratulations {game.game.winner}!"
        return _render_game(app, game, message=_with_save_note(message, saved))

    @app.input(
        "/game/{game_id}/reset",
        prompt="Reset all scores? This cannot be undone. Type YES to confirm:",
        name="reset_game",
    )
    def reset(request: Request, game_id: str, query: str):
        """Zero all scores with confirmation."""
        game = _load_game(request, game_id)
        if game is None:
            return _render_missing(app, game_id)
        if query.strip().upper() == "YES":
            saved = game.reset()
            message = _with_save_note("Scores reset.", saved)
            return _render_game(app, game, message=message)
        return Redirect(f"/game/{game_id}")


def register_routes(app: Xitzin) -> None:
    """Register gameplay routes."""
    _register_setup_routes(app)
    _register_scoring_routes(app)
