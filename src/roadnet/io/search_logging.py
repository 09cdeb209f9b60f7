# io/search_logging.py
import json
import logging
import sys

from roadnet.domain.hooks import NoopHooks


def _default_json_logger(name="roadnet", level="INFO"):
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler(sys.stdout)

        class _JsonFormatter(logging.Formatter):
            def format(self, record: logging.LogRecord) -> str:
                payload = {
                    "level": record.levelname,
                    "msg": record.getMessage(),
                    "logger": record.name,
                }
                extra = getattr(record, "extra", None)
                if isinstance(extra, dict):
                    payload.update(extra)
                return json.dumps(payload)

        h.setFormatter(_JsonFormatter())
        logger.addHandler(h)
        logger.setLevel(level)
    return logger


class SearchLogging(NoopHooks):
    """
    Structured logs for graph searches: one line per query at INFO,
    per-edge relaxations only when `debug` is on.
    """

    def __init__(
        self,
        level: str = "INFO",
        debug: bool = False,
        logger: logging.Logger | None = None,
    ):
        self.debug = debug
        self.level = logging.DEBUG if debug else logging.getLevelName(level)
        self.log = logger or _default_json_logger(level=self.level)
        # the logger is shared; only ever lower its threshold and filter per instance in _emit
        if self.log.getEffectiveLevel() > self.level:
            self.log.setLevel(self.level)
        self._queries = 0

    def _emit(self, level: str, msg: str, **extra):
        lvl = getattr(logging, level)
        if lvl < self.level:
            return
        self.log.log(lvl, msg, extra={"extra": {"query": self._queries, **extra}})

    def search_start(self, *, start_id, end_id, nodes, edges, solver):
        self._queries += 1
        self._emit(
            "INFO", "search_start", start_id=start_id, end_id=end_id, nodes=nodes, edges=edges, solver=solver
        )

    def relax(self, *, node_id, edge, distance):
        if self.debug:
            self._emit(
                "DEBUG", "relax", node_id=node_id, via=edge.source, segment_id=edge.segment_id, distance=distance
            )

    def stale_segment(self, *, segment_id, source, target):
        self._emit("WARNING", "stale_segment", segment_id=segment_id, source=source, target=target)

    def search_end(self, *, start_id, end_id, result, settled):
        if result is None:
            self._emit("INFO", "search_end", start_id=start_id, end_id=end_id, reachable=False, settled=settled)
        else:
            self._emit(
                "INFO",
                "search_end",
                start_id=start_id,
                end_id=end_id,
                reachable=True,
                distance=result.distance,
                hops=result.hops,
                settled=settled,
            )
