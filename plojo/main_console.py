""" Main module for running the engine on strokes typed into the console. """

import sys

from plojo import Plojo, PlojoOptions
from plojo.machine import StdinMachine
from plojo.output import StdoutSink


def main() -> int:
    """ Read strokes from standard input, one or more per line, and print the resulting output operations. """
    opts = PlojoOptions("Translate RTFCRE strokes from standard input and print output operations.")
    plojo = Plojo(opts)
    log = plojo.logger.log
    engine = plojo.build_engine(StdoutSink())
    machine = StdinMachine(plojo.converter, log, sep=plojo.keymap.sep)
    log("Ready for strokes.")
    count = machine.run(sys.stdin, engine.stroke)
    log(f"Input closed after {count} strokes ({machine.rejected} rejected).")
    return 0


if __name__ == '__main__':
    sys.exit(main())
