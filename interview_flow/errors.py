from __future__ import annotations  # Interview flow error taxonomy


class InterviewError(Exception):  # Base interview flow error
    pass


class InterviewInputError(InterviewError):  # Caller-supplied state is invalid; no model call made
    pass


class InvalidRoundError(InterviewInputError):
    def __init__(self, round_number: object, known: list[int]) -> None:
        self.round_number = round_number
        self.known = known
        options = ", ".join(str(item) for item in known)
        super().__init__(f"Invalid roundNumber {round_number!r}. Use one of: {options}")


class EmptyScoreSetError(InterviewInputError):
    def __init__(self) -> None:
        super().__init__("Cannot average an empty score list")


class EmptyRoundSetError(InterviewInputError):
    def __init__(self) -> None:
        super().__init__("Final report requires at least one round result")


class MismatchedRoundDataError(InterviewInputError):
    pass


class ProfileExtractionError(InterviewError):  # Model output could not be turned into a profile
    pass


__all__ = [
    "EmptyRoundSetError",
    "EmptyScoreSetError",
    "InterviewError",
    "InterviewInputError",
    "InvalidRoundError",
    "MismatchedRoundDataError",
    "ProfileExtractionError",
]
