"""CLI entry point for the fnlang interpreter.

Usage:
    python -m fnlang [-v|-vv|-vvv|-vvvv] [--parser {rd,lark}] [--max-depth N] <program_file>
    python -m fnlang [-v...] --emit-ast <program_file>
    python -m fnlang [-v...] --ast <ast_json_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --parser      Front end used to parse source files: the hand-written
                recursive-descent parser (rd, default) or the Lark grammar
  --max-depth   Maximum nesting of function calls before StackOverflow
  --debug-file  Where debug trace lines go (default: debug.txt)
  --emit-ast    Parse the given .fn file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file

Debug information is written to the debug file when verbosity is greater
than zero. Any lexing, parsing or runtime error is reported on stderr and
the process exits with status 1.
"""

import argparse
import json
import sys
from pathlib import Path
from .ast_json import ast_to_obj, ast_from_obj
from .errors import FnError
from .interpreter import Interpreter
from .lark_parser import parse_program_lark
from .parser import parse_program

PARSERS = {
    'rd': parse_program,
    'lark': parse_program_lark,
}


def read_source(path: Path) -> str:
    if not path.exists():
        print(f"Error: file {path} not found", file=sys.stderr)
        sys.exit(1)
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="fnlang interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('--parser', choices=sorted(PARSERS), default='rd', help='front end used to parse source')
    parser.add_argument('--max-depth', type=int, default=500, help='maximum function call depth')
    parser.add_argument('--debug-file', default='debug.txt', help='file receiving debug output')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='FN_FILE', help='emit AST JSON for the given .fn file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('program', nargs='?', help='fnlang program file (.fn) to execute')
    args = parser.parse_args(argv)
    parse_source = PARSERS[args.parser]

    try:
        # Emit AST mode
        if args.emit_ast:
            program_file = Path(args.emit_ast)
            ast_program = parse_source(read_source(program_file))
            obj = ast_to_obj(ast_program)
            out_path = program_file.with_name(program_file.name + '.ast.json')
            with open(out_path, 'w', encoding='utf-8') as out:
                json.dump(obj, out, ensure_ascii=False, indent=2)
            print(str(out_path))
            return

        if args.ast:
            ast_path = Path(args.ast)
            if not ast_path.exists():
                print(f"Error: file {ast_path} not found", file=sys.stderr)
                sys.exit(1)
            with open(ast_path, 'r', encoding='utf-8') as f:
                ast_program = ast_from_obj(json.load(f))
        else:
            # Default: execute source file
            if not args.program:
                parser.error('missing program file; or use --emit-ast/--ast')
            ast_program = parse_source(read_source(Path(args.program)))

        interpreter = Interpreter(debug_level=args.v, debug_file=args.debug_file, max_call_depth=args.max_depth)
        interpreter.run(ast_program)
    except FnError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
