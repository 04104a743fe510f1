from parsecore.Char import satisfy, text
from parsecore.Combinators import repeat0, list_of
from parsecore.Prim import run_parser


class TimeRepeat:
    def setup(self):
        self.parser = repeat0(text("a"))
        self.small = "a" * 1000
        self.medium = "a" * 10000
        self.large = "a" * 100000

    def time_repeat0_small(self):
        run_parser(self.parser, self.small)

    def time_repeat0_medium(self):
        run_parser(self.parser, self.medium)

    def time_repeat0_large(self):
        run_parser(self.parser, self.large)


class TimeList:
    def setup(self):
        self.parser = list_of(satisfy(str.isdigit, "digit"), text(","))
        self.medium = ",".join("7" * 10000)

    def time_list_of_medium(self):
        run_parser(self.parser, self.medium)
