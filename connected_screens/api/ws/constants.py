from enum import Enum


class MessageType(str, Enum):
    """
    Message type enumeration for the relay's wire protocol.

    Attributes:
        MOVE ("move"): Client asks to overwrite the shared ball state
        INIT ("init"): Server greets a new connection with its id and state
        UPDATE ("update"): Server pushes the current state to every client

    Example:
        >>> str(MessageType.MOVE)
        'MessageType.MOVE<move>'
    """

    MOVE = "move"
    INIT = "init"
    UPDATE = "update"

    def __str__(self):
        """
        Returns a string representation of the enum member in the format example "MessageType.MOVE<move>".
        """
        return f"{__class__.__name__}.{self.name}<{self.value}>"
