"""Interactive read-eval-print loop for monkey, built on cmd. Lines are buffered while brackets are left open and the
buffered entry is handed to the session once they are closed.
"""

import cmd


class Shell(cmd.Cmd):
    """Monkey interpreter shell."""
    intro = "Monkey interpreter :: Python backend\nType '?' or 'help' for more information."
    prompt = ">> "
    secondary_prompt = ".. "  # shown while an entry spans several lines
    _tmp_prompt = ">> "       # restored once the entry is complete

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess

        self.pending = []  # lines of the entry being typed
        self.line_num = 0

    def default(self, line):
        """Buffers line and runs the entry once its brackets are balanced."""
        with self.sess.error_handler:  # cmd.Cmd would otherwise stop the loop on any exception
            self.line_num += 1
            entry, incomplete = self.sess.preprocess_line("\n".join(self.pending + [line]))

            if incomplete:
                self.pending.append(line)
                self.prompt = self.secondary_prompt
                return

            first_line = self.line_num - len(self.pending)
            self.pending = []
            self.prompt = self._tmp_prompt
            self._submit(entry, first_line)

    def _submit(self, entry, first_line):
        self.sess.add(entry, first_line)
        self.sess.run()

        if self.sess.results:
            print(self.sess.pop())

    def do_mode(self, arg):
        """Shows the output mode, or switches it: mode [tokens|ast|parse|eval]."""
        with self.sess.error_handler:
            if arg.strip():
                self.sess.set_mode(arg.strip())
            print(self.sess.mode)

    def do_help(self, arg):
        """Prints a short introduction to the language and the shell."""
        print("Welcome to the monkey interpreter!\n\n"
              "Monkey is a small C-like expression language with integers, booleans, \n"
              "if/else expressions, return statements and function literals.\n\n"
              "Try it out by typing '(5 + 10 * 2 + 15 / 3) * 2 + -10'. This will print 50.\n"
              "Then try 'if (1 < 2) { 10 } else { 20 }', which gives 10.\n\n"
              "'mode tokens', 'mode ast' or 'mode parse' show the token stream, the syntax \n"
              "tree or the canonical rendering instead of the value; 'mode eval' switches back.\n"
              "Type 'exit' or press Ctrl-D to leave.")

    def emptyline(self):
        """Blank input does nothing, rather than repeating the last command. An open entry keeps it as a line."""
        if self.pending:
            self.default("")
        return False

    def do_EOF(self, arg):
        """Leaves the shell on Ctrl-D."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Leaves the shell."""
        return True
