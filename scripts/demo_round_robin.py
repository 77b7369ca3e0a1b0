import os
import sys

from cyclering.core import log
from cyclering.core.buffer import CircularBuffer
from cyclering.core.contracts import Event
from cyclering.core.dispatcher import Dispatcher
from cyclering.core.metrics import force_emit
from cyclering.ring_config import build_from_yaml


def main():
    log.setup()
    lg = log.get("demo.round_robin")

    # rings from a YAML file if given, otherwise a small built-in pool
    if len(sys.argv) > 1:
        rings = build_from_yaml(sys.argv[1])
    else:
        rings = {"workers": CircularBuffer(["w0", "w1", "w2"], name="workers")}

    for name, ring in rings.items():
        if ring.is_empty():
            lg.info("ring %s is empty, skipping", name)
            continue
        picks = [ring.advance() for _ in range(2 * len(ring) + 1)]
        lg.info("ring %s picks=%s cursor=%d", name, picks, ring.cursor_position())

    disp = Dispatcher()
    disp.register("job", [lambda ev, k=k: f"slot{k}:{ev.data}" for k in range(3)])
    for i in range(5):
        lg.info("dispatch -> %s", disp.handle(Event("job", i)))

    force_emit(logger=log.get("metrics"), json_mode=(os.getenv("LOG_JSON", "0") == "1"))


if __name__ == "__main__":
    main()
