import argparse
import asyncio

from treasure_board.authentication.basic_authentication_crud import CreateAuthentication
from treasure_board.crud import create_tables
from treasure_board.domain.commitment import commitment_for, solution_bytes


def get_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="treasure-board", description="Treasure board operator tool")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("init-db", help="Create tables and initialize the board registry")

    user_parser = subparsers.add_parser("create-user", help="Store a basic authentication user")
    user_parser.add_argument("--username", type=str, help="Username (account id)", required=True)
    user_parser.add_argument("--password", type=str, help="Password", required=True)

    hash_parser = subparsers.add_parser(
        "hash-solution",
        help="Print the commitment of a solution: bomb slots followed by salt, numbers 0-255",
    )
    hash_parser.add_argument("values", type=int, nargs="+")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", type=str, default="0.0.0.0")
    serve_parser.add_argument("--port", type=int, default=8080)
    return parser


def hash_solution(values: list[int]) -> str:
    try:
        solution = solution_bytes(values)
    except ValueError:
        raise SystemExit("Solution values must be numbers between 0 and 255")
    return commitment_for(solution).hex()


async def init_db() -> None:
    from treasure_board.db import engine
    from treasure_board.dependencies import board_registry

    await create_tables(engine)
    await board_registry.initialize()
    await engine.dispose()


async def create_user(username: str, password: str) -> None:
    from treasure_board.db import Session, engine

    await create_tables(engine)
    user = await CreateAuthentication.create_user_data(username, password, Session)
    print(user.username, user.hash_password, user.salt)
    await engine.dispose()


def main(argv: list[str] | None = None) -> None:
    args = get_parser().parse_args(argv)
    if args.command == "init-db":
        asyncio.run(init_db())
    elif args.command == "create-user":
        asyncio.run(create_user(args.username, args.password))
    elif args.command == "hash-solution":
        print(hash_solution(args.values))
    elif args.command == "serve":
        import uvicorn

        uvicorn.run("treasure_board.main:app", host=args.host, port=args.port)


if __name__ == "__main__":
    main()
