"""Runs the monkey interpreter on a .mk file or in command-line mode. Also uses error handling context manager. Called
from the monkey console script.

Python version must be >=3.8, because error handling requires that dicts are insertion-ordered.
"""

import argparse
import sys

from monkey.lang.error import ErrorHandler
from monkey.lang.session import Session
from monkey.lang.shell import Shell


def main(argv=None):
    """Runs monkey interpreter. Called from monkey console script."""
    assert sys.version_info >= (3, 8), "monkey cannot be run with python < 3.8"

    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(prog="monkey")
        parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
        parser.add_argument("--mode", choices=Session.MODES, default="eval",
                            help="print token stream, syntax tree, canonical rendering or value (default: eval)")
        args = parser.parse_args(argv)

        if args.file is not None:
            sess = Session(error_handler, args.file, cmd_line=False, mode=args.mode)
            sess.run()

            for result in sess.results:
                print(result)

        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True, mode=args.mode)).cmdloop()


if __name__ == "__main__":
    main()
