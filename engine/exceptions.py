# engine/exceptions.py

class EngineError(Exception):
    pass


class InvalidEventKind(EngineError, ValueError):
    pass
