"""
ASE Script Interpreter

This is the command line entry point for ASE Script.

Workflow:
1. The source script is read from the file given on the command line.
2. The Lexer tokenizes the source code.
3. The Parser processes tokens into an AST following the language grammar.
4. The Interpreter walks the AST, forwarding each command invocation to the
   dispatcher.

Drawing commands belong to a host application, so the command line host
registers echo commands instead: every ``-c NAME[:ALIAS...]`` option adds a
command that prints its name and arguments when a script invokes it.

Pass ``--tokens``, or set ``ASEDEBUG`` in the environment, to print the
tokens and AST before execution.
"""
import argparse
import logging
import os
import sys

from asescript.commands import CommandDispatcher, EchoCommand
from asescript.environment import ScriptEnvironment
from asescript.exceptions import ScriptException
from asescript.interpreter import ExecutionContext


def debug_print_tokens_ast(tokens, ast):
    """
    Print tokenized source and AST
    """
    print("\nTokens:\n")
    print(tokens)
    print("\nAST:\n")
    print(ast)
    print(" ")


def build_dispatcher(command_specs: list[str]) -> CommandDispatcher:
    """
    Build a dispatcher with an echo command per ``NAME[:ALIAS...]`` spec.
    """
    dispatcher = CommandDispatcher()
    for spec in command_specs:
        dispatcher.registry.register(EchoCommand.from_spec(spec))
    return dispatcher


def run_script(script_name: str, dispatcher: CommandDispatcher, show_tokens: bool = False) -> int:
    """
    Run an ASE script, returning the process exit code.
    """
    try:
        with open(script_name, "r", encoding="utf-8") as f:
            code = f.read()
    except OSError as e:
        print(f"{type(e).__name__}: {e}")
        return 1

    env = ScriptEnvironment(dispatcher, script_name)
    if show_tokens or os.environ.get("ASEDEBUG"):
        tokens = env.tokenize(code)
        try:
            ast = env.parse(code)
        except ScriptException as e:
            ast = f"<unparseable: {e}>"
        debug_print_tokens_ast(tokens, ast)

    result = env.execute(code)
    if not result.ok:
        print(f"{type(result.error).__name__}: {result.message}")
        return 1
    return 0


def run_repl(dispatcher: CommandDispatcher) -> None:
    """
    Run the interactive REPL.

    Bindings and methods persist between inputs. Input is buffered while a
    block is still open.
    """
    print("ASE Script Interpreter - REPL")
    print("Type `exit` or `quit` to leave.")
    env = ScriptEnvironment(dispatcher, "<stdin>")
    context = ExecutionContext()
    buffer: list[str] = []
    while True:
        try:
            prompt = ">>> " if not buffer else "... "
            line = input(prompt)
            if not buffer and line.strip() in {"exit", "quit"}:
                break
            buffer.append(line)
            result = env.execute("\n".join(buffer), context)
            if result.ok:
                buffer.clear()
                continue
            # An open block means the input is incomplete; keep reading
            if getattr(result.error, "incomplete", False):
                continue
            print(f"{type(result.error).__name__}: {result.message}")
            buffer.clear()
        except KeyboardInterrupt:
            print("\nInterrupted.")
            break
        except EOFError:
            print()
            break


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ase",
        description="ASE Script interpreter. Runs a script, or a REPL when no script is given.",
    )
    parser.add_argument("script", nargs="?", help="path to an ASE script to execute")
    parser.add_argument(
        "-c",
        "--command",
        dest="commands",
        action="append",
        default=[],
        metavar="NAME[:ALIAS...]",
        help="register an echo command (repeatable)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="log lexer, parser and dispatch activity"
    )
    parser.add_argument(
        "--tokens", action="store_true", help="print the tokens and AST before running the script"
    )
    return parser


def main(argv: list[str]) -> int:
    """
    Entry point for the CLI.

    Behaviour:
    - No script argument: enter the REPL.
    - A script argument: run it and return a non-zero exit code on failure.
    """
    args = build_arg_parser().parse_args(argv[1:])
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    try:
        dispatcher = build_dispatcher(args.commands)
    except ValueError as e:
        print(f"{type(e).__name__}: {e}")
        return 2
    if args.script is None:
        run_repl(dispatcher)
        return 0
    return run_script(args.script, dispatcher, args.tokens)


def entry() -> None:
    sys.exit(main(sys.argv))


if __name__ == "__main__":
    entry()
