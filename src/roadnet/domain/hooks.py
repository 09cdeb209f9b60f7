# roadnet/domain/hooks.py


class NoopHooks:
    def search_start(self, **_):
        pass

    def relax(self, **_):
        pass

    def stale_segment(self, **_):
        pass

    def search_end(self, **_):
        pass
