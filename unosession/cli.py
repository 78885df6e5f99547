"""CLI entry point."""

from __future__ import annotations

import logging
from typing import Optional

import typer
from dotenv import load_dotenv

from unosession.config import DEFAULT_STORE_DIR, ENV_LOG_LEVEL, ENV_STORE_DIR, SessionConfig

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(help="UNO session rules engine")


@app.callback()
def main(
    log_level: str = typer.Option(
        "WARNING", "--log-level", "-l", envvar=ENV_LOG_LEVEL, help="Logging level"
    ),
) -> None:
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise typer.BadParameter(f"Unknown log level: {log_level}", param_hint="--log-level")
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _dispatcher(store: str):
    from unosession.orchestration.dispatcher import SessionDispatcher
    from unosession.storage import JsonFileSessionStore

    try:
        config = SessionConfig.from_env()
    except ValueError as e:
        typer.echo(f"error: config: {e}", err=True)
        raise typer.Exit(code=1)
    return SessionDispatcher(JsonFileSessionStore(store), config=config)


def _run(store: str, session_id: str, request) -> None:
    from unosession.engine.errors import RuleError

    try:
        session = _dispatcher(store).execute(session_id, request)
    except RuleError as e:
        typer.echo(f"error: {e.kind}: {e.message}", err=True)
        raise typer.Exit(code=1)
    typer.echo(session.history[-1])


@app.command()
def create(
    session_id: str = typer.Argument(..., help="Session id"),
    identity: str = typer.Option(..., "--as", "-i", help="Acting player identity"),
    store: str = typer.Option(
        DEFAULT_STORE_DIR, "--store", envvar=ENV_STORE_DIR, help="Directory holding session files"
    ),
) -> None:
    """Create a session with yourself in the first seat."""
    from unosession.orchestration.dispatcher import CreateSession

    _run(store, session_id, CreateSession(identity))


@app.command()
def join(
    session_id: str = typer.Argument(..., help="Session id"),
    identity: str = typer.Option(..., "--as", "-i", help="Acting player identity"),
    store: str = typer.Option(
        DEFAULT_STORE_DIR, "--store", envvar=ENV_STORE_DIR, help="Directory holding session files"
    ),
) -> None:
    """Join a session."""
    from unosession.orchestration.dispatcher import Join

    _run(store, session_id, Join(identity))


@app.command()
def leave(
    session_id: str = typer.Argument(..., help="Session id"),
    identity: str = typer.Option(..., "--as", "-i", help="Acting player identity"),
    store: str = typer.Option(
        DEFAULT_STORE_DIR, "--store", envvar=ENV_STORE_DIR, help="Directory holding session files"
    ),
) -> None:
    """Leave a session. Your cards leave the game with you."""
    from unosession.orchestration.dispatcher import Leave

    _run(store, session_id, Leave(identity))


@app.command()
def draw(
    session_id: str = typer.Argument(..., help="Session id"),
    identity: str = typer.Option(..., "--as", "-i", help="Acting player identity"),
    store: str = typer.Option(
        DEFAULT_STORE_DIR, "--store", envvar=ENV_STORE_DIR, help="Directory holding session files"
    ),
) -> None:
    """Draw one card. Your turn continues."""
    from unosession.orchestration.dispatcher import Draw

    _run(store, session_id, Draw(identity))


@app.command()
def play(
    session_id: str = typer.Argument(..., help="Session id"),
    card: str = typer.Argument(..., help="Card, e.g. red_5, blue_skip, wild_draw_four"),
    identity: str = typer.Option(..., "--as", "-i", help="Acting player identity"),
    color: Optional[str] = typer.Option(None, "--color", "-c", help="Color to declare for wilds"),
    store: str = typer.Option(
        DEFAULT_STORE_DIR, "--store", envvar=ENV_STORE_DIR, help="Directory holding session files"
    ),
) -> None:
    """Play a card from your hand."""
    from unosession.engine.card import Card, Color
    from unosession.orchestration.dispatcher import Play

    try:
        parsed = Card.parse(card)
        declared = Color(color.lower()) if color else None
    except ValueError as e:
        raise typer.BadParameter(str(e))
    _run(store, session_id, Play(identity, parsed, declared))


@app.command("pass")
def pass_turn(
    session_id: str = typer.Argument(..., help="Session id"),
    identity: str = typer.Option(..., "--as", "-i", help="Acting player identity"),
    store: str = typer.Option(
        DEFAULT_STORE_DIR, "--store", envvar=ENV_STORE_DIR, help="Directory holding session files"
    ),
) -> None:
    """End your turn without playing."""
    from unosession.orchestration.dispatcher import Pass

    _run(store, session_id, Pass(identity))


@app.command()
def status(
    session_id: str = typer.Argument(..., help="Session id"),
    store: str = typer.Option(
        DEFAULT_STORE_DIR, "--store", envvar=ENV_STORE_DIR, help="Directory holding session files"
    ),
) -> None:
    """Show the public state of a session."""
    from unosession.engine.errors import RuleError
    from unosession.orchestration.dispatcher import GetSessionSummary

    try:
        summary = _dispatcher(store).query(session_id, GetSessionSummary())
    except RuleError as e:
        typer.echo(f"error: {e.kind}: {e.message}", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"Phase: {summary.phase.value}")
    typer.echo(f"Players: {', '.join(summary.players)}")
    typer.echo(f"Current player: {summary.current_player or '-'}")
    typer.echo(f"Direction: {'clockwise' if summary.direction == 1 else 'counter-clockwise'}")
    typer.echo(f"Top discard: {summary.top_discard or '-'}")
    typer.echo(f"Color to match: {summary.active_color.value if summary.active_color else 'any'}")
    typer.echo(f"Deck: {summary.deck_size} cards")
    for pid, count in summary.num_cards_per_player.items():
        typer.echo(f"  {pid}: {count} cards")
    if summary.winner:
        typer.echo(f"Winner: {summary.winner}")


@app.command()
def hand(
    session_id: str = typer.Argument(..., help="Session id"),
    identity: str = typer.Option(..., "--as", "-i", help="Acting player identity"),
    store: str = typer.Option(
        DEFAULT_STORE_DIR, "--store", envvar=ENV_STORE_DIR, help="Directory holding session files"
    ),
) -> None:
    """Show your hand."""
    from unosession.engine.errors import RuleError
    from unosession.orchestration.dispatcher import GetPlayerHand

    try:
        cards = _dispatcher(store).query(session_id, GetPlayerHand(identity))
    except RuleError as e:
        typer.echo(f"error: {e.kind}: {e.message}", err=True)
        raise typer.Exit(code=1)
    typer.echo(" ".join(str(c) for c in cards))


@app.command()
def simulate(
    players: int = typer.Option(4, "--players", "-n", help="Number of random agents"),
    games: int = typer.Option(1, "--games", "-g", help="Number of games"),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Random seed"),
    max_turns: int = typer.Option(1000, "--max-turns", help="Turn cap per game"),
    human: bool = typer.Option(False, "--human", help="Take the first seat yourself"),
) -> None:
    """Play games between random agents."""
    from unosession.agents.human_agent import HumanAgent
    from unosession.agents.random_agent import RandomAgent
    from unosession.orchestration.game_runner import GameRunner
    from unosession.orchestration.tournament import run_tournament

    if players < 1:
        raise typer.BadParameter("Need at least one player")
    agents = {
        f"player_{i}": RandomAgent(name=f"Bot{i}", seed=None if seed is None else seed + i)
        for i in range(players)
    }
    if human:
        agents["player_0"] = HumanAgent(name="You")
    if games == 1:
        result = GameRunner(agents, seed=seed, max_turns=max_turns).run()
        for line in result.session.history:
            typer.echo(f"> {line}")
        typer.echo(f"Winner: {result.winner or 'None (turn cap)'}")
        typer.echo(f"Turns: {result.num_turns}")
        return

    tally = run_tournament(agents, num_games=games, seed=seed, max_turns=max_turns)
    typer.echo(f"Tournament results ({games} games, {tally.mean_turns:.1f} turns on average):")
    for pid, w in tally.standings():
        typer.echo(f"  {pid}: {w} wins")
    if tally.unfinished:
        typer.echo(f"  unfinished: {tally.unfinished}")


if __name__ == "__main__":
    app()
