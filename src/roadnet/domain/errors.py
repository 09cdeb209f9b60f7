# roadnet/domain/errors.py


class RoadnetError(Exception):
    pass


class UnknownNodeError(RoadnetError, KeyError):
    def __init__(self, node_id: int):
        super().__init__(node_id)
        self.node_id = node_id

    def __str__(self) -> str:
        return f"unknown node id {self.node_id!r}"


class UnknownSegmentError(RoadnetError, KeyError):
    def __init__(self, segment_id: int):
        super().__init__(segment_id)
        self.segment_id = segment_id

    def __str__(self) -> str:
        return f"segment {self.segment_id!r} is not part of this network"
