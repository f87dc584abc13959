"""Integration tests for routes."""


def _start(client, app, names="Ann, Ben"):
    response = client.get_input("/new", names)
    assert response.is_success
    return app.state.drafts.ids()[-1]


def test_home_page(client):
    response = client.get("/")
    assert response.is_success
    assert "Scorekeeper" in response.body


def test_new_game_prompt(client):
    response = client.get("/new")
    assert response.is_input_required


def test_new_game_rejects_bad_roster(client, app):
    response = client.get_input("/new", "Ann, Ann")
    assert response.is_success
    assert "unique" in response.body
    assert len(app.state.drafts) == 0


def test_draft_is_not_stored(client, app):
    game_id = _start(client, app)
    assert app.state.store.list() == []

    response = client.get(f"/game/{game_id}")
    assert response.is_success
    assert "Round 1" in response.body


def test_play_a_game(client, app):
    game_id = _start(client, app)

    response = client.get_input(f"/game/{game_id}/round", "5 3")
    assert response.is_success
    assert "Round 1 recorded" in response.body
    assert game_id not in app.state.drafts

    response = client.get_input(f"/game/{game_id}/round", "1 9")
    assert "Round 3" in response.body

    response = client.get(f"/game/{game_id}/finish")
    assert response.is_success
    assert "Congratulations Ben" in response.body

    stored = app.state.store.get(game_id)
    assert stored.is_completed
    assert stored.total_rounds == 2


def test_round_prompt(client, app):
    game_id = _start(client, app)
    response = client.get(f"/game/{game_id}/round")
    assert response.is_input_required


def test_short_round_is_rejected(client, app):
    game_id = _start(client, app)
    response = client.get_input(f"/game/{game_id}/round", "5")
    assert "Missing scores" in response.body
    assert app.state.store.list() == []


def test_finish_without_rounds(client, app):
    game_id = _start(client, app)
    response = client.get(f"/game/{game_id}/finish")
    assert "at least one round" in response.body


def test_unknown_game(client):
    response = client.get("/game/game_0")
    assert response.is_success
    assert "not found" in response.body


def test_reset_scores(client, app):
    game_id = _start(client, app)
    client.get_input(f"/game/{game_id}/round", "5 3")

    response = client.get_input(f"/game/{game_id}/reset", "yes")
    assert "Scores reset" in response.body
    assert app.state.store.get(game_id).total_rounds == 0


def test_history_and_delete(client, app):
    game_id = _start(client, app)
    client.get_input(f"/game/{game_id}/round", "5 3")

    response = client.get("/history")
    assert response.is_success
    assert "Ann: 5" in response.body

    client.get_input(f"/history/{game_id}/delete", "no")
    assert app.state.store.get(game_id) is not None

    response = client.get_input(f"/history/{game_id}/delete", "YES")
    assert "Game deleted" in response.body
    assert app.state.store.list() == []


def test_statistics_page(client, app):
    response = client.get("/statistics")
    assert "No statistics available" in response.body

    game_id = _start(client, app)
    client.get_input(f"/game/{game_id}/round", "2 8")
    client.get(f"/game/{game_id}/finish")

    response = client.get("/statistics")
    assert response.is_success
    assert "Ben: 100.0%" in response.body
    assert "Ann: 2.0" in response.body


def test_reset_all(client, app):
    game_id = _start(client, app)
    client.get_input(f"/game/{game_id}/round", "2 8")

    response = client.get("/reset")
    assert response.is_input_required

    response = client.get_input("/reset", "YES")
    assert "All data cleared" in response.body
    assert app.state.store.list() == []


def test_every_new_game_gets_its_own_draft(client, app):
    ids = {_start(client, app) for _ in range(20)}
    assert len(ids) == 20
    assert len(app.state.drafts) == 20


def test_unsaved_first_round_keeps_draft(client, app):
    store = app.state.store
    store.blobs.write(store.games_key, "{broken", 0)
    game_id = _start(client, app)

    response = client.get_input(f"/game/{game_id}/round", "5 3")
    assert "could not be saved" in response.body
    assert game_id in app.state.drafts

    response = client.get(f"/game/{game_id}")
    assert response.is_success
    assert "Ann: 5" in response.body
