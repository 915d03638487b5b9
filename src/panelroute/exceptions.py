"""Exception hierarchy for Panelroute."""


class PanelrouteError(Exception):
    """Base exception for all Panelroute errors."""

    pass


class DocumentError(PanelrouteError):
    """Errors related to loading or saving panel documents."""

    pass


class DocumentLoadError(DocumentError):
    """Error loading a panel document."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load panel document '{path}': {reason}")


class DocumentSaveError(DocumentError):
    """Error saving routing output."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save '{path}': {reason}")


class DocumentFormatError(DocumentError):
    """Malformed panel document."""

    def __init__(self, path: str, details: str) -> None:
        self.path = path
        self.details = details
        super().__init__(f"Invalid panel document '{path}': {details}")


class LookupFailedError(PanelrouteError):
    """A referenced board or placement does not exist."""

    pass


class BoardNotFoundError(LookupFailedError):
    """Requested board not found in panel."""

    def __init__(self, board_id: str) -> None:
        self.board_id = board_id
        super().__init__(f"Board '{board_id}' not found in panel")


class InstanceNotFoundError(LookupFailedError):
    """Requested board instance not found in panel."""

    def __init__(self, instance_id: str) -> None:
        self.instance_id = instance_id
        super().__init__(f"Board instance '{instance_id}' not found in panel")


class GeometryError(PanelrouteError):
    """Errors in geometric calculations."""

    pass


class InvalidHintError(GeometryError):
    """An outline location hint does not refer to the outline it is used with."""

    def __init__(self, segment_index: int, t: float, segment_count: int) -> None:
        self.segment_index = segment_index
        self.t = t
        self.segment_count = segment_count
        super().__init__(
            f"Location hint (segment {segment_index}, t={t}) is invalid "
            f"for an outline of {segment_count} segments"
        )
