"""Domain exceptions.

Remote calls have a two-valued outcome: they succeed or they raise one of
AnalysisFailed / TutorChatError with the underlying cause chained.
"""


class LitMasterError(Exception):
    """Base class for all LitMaster errors."""


class AnalysisFailed(LitMasterError):
    """The analysis call threw, returned nothing, or returned unparseable JSON."""


class TutorChatError(LitMasterError):
    """The tutor chat call failed."""


class EmptyTextError(LitMasterError, ValueError):
    """Input text or chat message was blank after trimming."""


class ResultNotFound(LitMasterError, KeyError):
    """No stored analysis result has the requested id."""


class AccountError(LitMasterError):
    pass


class RegistrationError(AccountError):
    pass


class LoginError(AccountError):
    pass
