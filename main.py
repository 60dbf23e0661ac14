"""
Command line front end for remote TicTacToe.

Each invocation is one call against the state file, so two players can take
turns from separate shells:

    python main.py --as alice new-game bob
    python main.py --as alice play 2 2
    python main.py --as bob play 1 1
    python main.py --as bob view
    python main.py stats alice
"""

import logging
import sys

from game.errors import TicTacToeError
from game.game_session import MoveOutcome, OutcomeKind
from game.move_validator import MoveValidator
from registry.collaborators import DepositBiller, NullBiller, StaticIdentity
from registry.config import MatchConfig
from registry.kv_store import JsonFileStore
from registry.service import TicTacToeService


def describe_outcome(outcome: MoveOutcome) -> str:
    if outcome.kind == OutcomeKind.WON:
        return "You've won!!!!"
    if outcome.kind == OutcomeKind.LOST:
        return "You have lost :'("
    if outcome.kind == OutcomeKind.TIED:
        return "You've tied :|"
    return "Move accepted. Waiting for your opponent."


def resolve_log_level(verbose: bool, configured: str) -> int:
    """--verbose shows the INFO game log; otherwise LOG_LEVEL applies."""
    if verbose:
        return logging.INFO
    level = getattr(logging, str(configured).upper(), None)
    return level if isinstance(level, int) else logging.WARNING


def build_service(args, config: MatchConfig) -> TicTacToeService:
    store = JsonFileStore(args.store)
    identity = StaticIdentity(args.player)
    biller = DepositBiller(config) if args.deposit is not None else NullBiller()
    return TicTacToeService(store, identity, biller=biller, config=config)


def run_command(args, service: TicTacToeService):
    if args.command == "new-game":
        receipt = service.start_session(args.opponent, attached_deposit=args.deposit or 0)
        print(f"Game started against {args.opponent}. You play X and move first.")
        print(f"  Session: {receipt.session_key}")
        print(f"  Storage allocated: {receipt.bytes_allocated} bytes")
        if receipt.refund:
            print(f"  Refund: {receipt.refund}")

    elif args.command == "play":
        outcome = service.submit_move(args.row, args.col)
        print(describe_outcome(outcome))

    elif args.command == "view":
        print(service.view_session())
        session = service.registry.view_session(service.identity.current_player())
        if not session.is_terminal:
            print(f"\nCurrent turn: {session.turn.value} ({session.current_player_id})")
            open_cells = MoveValidator().get_valid_moves(session)
            print("Open positions: " + ", ".join(f"{r},{c}" for r, c in open_cells))

    elif args.command == "stats":
        stats = service.view_stats(args.target)
        print(f"{args.target}")
        print(f"  Wins:   {stats.wins}")
        print(f"  Ties:   {stats.ties}")
        print(f"  Losses: {stats.losses}")


def main(argv=None) -> int:
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="Remote TicTacToe")
    parser.add_argument(
        "--as",
        dest="player",
        help="Your player id"
    )
    parser.add_argument(
        "--store",
        default=MatchConfig.STORE_PATH,
        help="Path of the state file (default: %(default)s)"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log boards and results as they happen"
    )
    parser.add_argument(
        "--lazy-teardown",
        action="store_true",
        help="Only clear the mover when a game ends; the opponent settles it on their next move"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    new_game = subparsers.add_parser("new-game", help="Challenge another player")
    new_game.add_argument("opponent")
    new_game.add_argument(
        "--deposit",
        type=int,
        default=None,
        help="Deposit to charge storage against; the excess is refunded"
    )

    play = subparsers.add_parser("play", help="Place your mark (row and column are 1-3)")
    play.add_argument("row", type=int)
    play.add_argument("col", type=int)

    subparsers.add_parser("view", help="Show your current game")

    stats = subparsers.add_parser("stats", help="Show a player's wins, ties and losses")
    stats.add_argument("target")

    args = parser.parse_args(argv)
    if not hasattr(args, "deposit"):
        args.deposit = None

    config = MatchConfig()
    if args.lazy_teardown:
        config.EAGER_TEARDOWN = False

    logging.basicConfig(
        level=resolve_log_level(args.verbose, config.LOG_LEVEL),
        format="%(message)s"
    )

    if args.command != "stats" and not args.player:
        parser.error("--as is required for this command")

    service = build_service(args, config)
    try:
        run_command(args, service)
    except TicTacToeError as e:
        print(f"Error: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
