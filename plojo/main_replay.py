""" Main module for replaying a stroke log through a fresh engine. """

import sys

from plojo import Plojo, PlojoOptions
from plojo.output import TextBufferSink
from plojo.translation import encode_translation


def main() -> int:
    """ Feed every stroke from a log into an engine with an in-memory text field.
        Report strokes whose translation differs from the recorded one, then print the final text.
        Returns 1 if anything differed, so dictionary changes can be checked against past sessions. """
    opts = PlojoOptions("Replay a stroke log and compare translations with the ones recorded.")
    opts.add("input", "~/strokes.jsonl", "Stroke log file to replay.")
    plojo = Plojo(opts)
    log = plojo.logger.log
    entries = plojo.resource_io.load_stroke_log(opts.convert_path(opts.input))
    translations = []
    sink = TextBufferSink()
    engine = plojo.build_engine(sink, record=lambda stroke, translation: translations.append(translation))
    mismatches = 0
    for i, (rtfcre, recorded) in enumerate(entries, 1):
        try:
            stroke = plojo.converter.stroke(rtfcre)
        except ValueError as e:
            mismatches += 1
            log(f"Stroke {i} ({rtfcre}) skipped: {e}")
            continue
        engine.stroke(stroke)
        translation = translations[-1]
        current = None if translation is None else encode_translation(translation)
        if current != recorded:
            mismatches += 1
            log(f"Stroke {i} ({rtfcre}): recorded {recorded}, now {current}.")
    log(f"Replayed {len(entries)} strokes with {mismatches} differences.")
    print(sink.text)
    return 1 if mismatches else 0


if __name__ == '__main__':
    sys.exit(main())
