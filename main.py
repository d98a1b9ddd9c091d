import sys

from app.book.sequence import build_sequence, SequenceAborted
from app.sentry_config import init_sentry, LOGGER

def main():
    init_sentry()
    sequence = build_sequence()
    try:
        sequence.run()
    except SequenceAborted as error:
        LOGGER.error("Book sequence stopped: %s", error)
        return 1
    return 0

if __name__ == "__main__":
    sys.exit(main())
