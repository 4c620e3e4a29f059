# Role: Local developer CLI to interact with QueryRouter without the web UI.
# Useful for deterministic testing and seeing debug logs in the terminal.

from __future__ import annotations

import sys

import smart_converter.config
smart_converter.config.load_env()

from smart_converter.core.router import QueryRouter


def _print_result(result) -> None:
    print(f"\nAssistant: {result.final_response}")
    if result.error and result.success:
        print(f"(partial: {result.error})")


def _print_examples(router: QueryRouter) -> None:
    examples = router.get_examples()
    for i, example in enumerate(examples["examples"], start=1):
        print(f"{i}. {example}")
    for tool, tool_examples in examples["tool_examples"].items():
        print(f"\n{tool}:")
        for example in tool_examples:
            print(f"  - {example}")
    print(f"\npopular currency pairs: {', '.join(examples['popular_currency_pairs'])}")


def _print_status(router: QueryRouter) -> None:
    status = router.get_status()
    print(f"configured: {status['is_configured']}")
    print(f"model: {status['model_name']}")
    print(f"history entries: {status['history_length']}")
    if status["configuration_error"]:
        print(f"note: {status['configuration_error']} (keyword analysis + local answers are used)")


def main(argv: list[str] | None = None) -> None:
    # 1) Create QueryRouter (one session for the whole run)
    # 2) A query on the command line runs once and exits
    # 3) Otherwise loop: user input -> QueryRouter -> print answer
    args = sys.argv[1:] if argv is None else argv
    router = QueryRouter()

    if args:
        _print_result(router.process(" ".join(args)))
        return

    print("Smart Converter CLI")
    print("Commands: /examples, /status, /clear (clear history), /exit")
    print("-" * 50)

    while True:
        try:
            query = input("\nYou: ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nBye!")
            return

        if not query:
            continue

        cmd = query.lower()

        if cmd in {"/exit", "exit", "quit", "/quit"}:
            print("Bye!")
            return

        if cmd in {"/examples", "examples"}:
            _print_examples(router)
            continue

        if cmd in {"/status", "status"}:
            _print_status(router)
            continue

        if cmd in {"/clear", "clear"}:
            router.clear_history()
            print("History cleared.")
            continue

        _print_result(router.process(query))


if __name__ == "__main__":
    main()
