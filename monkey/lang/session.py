"""Session control for the monkey language. Feeds source entries (a whole file, or lines typed into the shell) through
the lexer, parser and evaluator and keeps what should be printed for each.
"""

from monkey.lang.error import GenericException, ParseError
from monkey.lang.evaluator import evaluate
from monkey.lang.lexical import tokenize
from monkey.lang.parser import Parser
from monkey.lang.token import TokenType


class Session:
    """Governs a monkey session: pending source entries and their printable results."""
    SH_FILE = "<in>"  # command-line interpreter filename
    MODES = ("tokens", "ast", "parse", "eval")

    def __init__(self, error_handler, path, cmd_line, mode="eval"):
        self.set_mode(mode)

        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode

        self.to_run = {}   # dict of line num: source entry to run
        self.results = []  # printable results, in order

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            try:
                with open(path, "r") as file:
                    self.add(file.read(), 1)
            except OSError:
                raise GenericException("'{}' could not be opened", path, diagnosis=False)

        elif not cmd_line:
            raise GenericException("'<in>' is a reserved filename")

    def set_mode(self, mode):
        """Sets what is kept as result: token stream, node tree, rendering or value."""
        if mode not in Session.MODES:
            raise GenericException("unknown mode '{}'", mode, diagnosis=False)
        self.mode = mode

    @staticmethod
    def preprocess_line(line):
        """Removes trailing whitespace from a line of input. Returns the line and whether it needs a continuation,
        which is the case while parentheses or braces are left open.
        """
        line = line.rstrip()
        opened = line.count("(") + line.count("{")
        closed = line.count(")") + line.count("}")
        return line, opened > closed

    def add(self, source, line_num):
        """Adds a source entry starting at line_num. Nothing is run until run is called."""
        if not source.strip():
            return
        self.to_run[line_num] = source

    def run(self):
        """Runs pending source entries in order, appending their results. Will raise any errors that are
        encountered.
        """
        for line_num, source in list(self.to_run.items()):
            self.error_handler.register_line(self.path, source, line_num)

            try:
                self.results.append(self.execute(source, line_num))
            finally:
                del self.to_run[line_num]

            self.error_handler.remove_line(self.path)

    def execute(self, source, line_num=1):
        """Returns printable result of source according to self.mode."""
        if self.mode == "tokens":
            return self._tokens(source, line_num)

        parser = Parser.from_source(source)
        program = parser.parse_program()
        try:
            parser.check_errors()
        except ParseError as error:
            if error.line is not None:
                self.error_handler.register_line(self.path, error.expr, line_num + error.line)
            raise

        if self.mode == "ast":
            return program.display()
        elif self.mode == "parse":
            return str(program)
        return evaluate(program).inspect()

    def _tokens(self, source, line_num):
        """Token stream of source, one localized token per line. Illegal tokens are reported as warnings."""
        lines = []
        for token in tokenize(source, localized=True):
            if token.type is TokenType.ILLEGAL:
                self.error_handler.register_line(self.path, token.code_line, line_num + token.line)
                self.error_handler.warn("illegal character '{1}'", (token.code_line, token.literal),
                                        start=token.column, end=token.column + 1)
            lines.append(str(token))

        self.error_handler.remove_line(self.path)
        return "\n".join(lines)

    def pop(self):
        """Removes and returns the latest result."""
        return self.results.pop()
