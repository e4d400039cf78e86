"""
Domain exceptions raised by the SchemeFlow services
"""


class SchemeFlowError(Exception):
    """Base class for all domain errors"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(SchemeFlowError):
    """Lookup by id found nothing"""


class ApprovalNotFoundError(NotFoundError):
    def __init__(self, approval_id: str):
        super().__init__(f"Approval not found: {approval_id}")
        self.approval_id = approval_id


class PatientNotFoundError(NotFoundError):
    def __init__(self, patient_id: str):
        super().__init__(f"Patient not found: {patient_id}")
        self.patient_id = patient_id


class SchemeNotFoundError(NotFoundError):
    def __init__(self, scheme_id: str):
        super().__init__(f"Scheme not found: {scheme_id}")
        self.scheme_id = scheme_id


class InvalidTransitionError(SchemeFlowError):
    """Approval action not allowed in the record's current state"""


class DuplicateSchemeError(SchemeFlowError):
    def __init__(self, scheme_id: str):
        super().__init__(f"Scheme already exists: {scheme_id}")
        self.scheme_id = scheme_id


class AuthenticationError(SchemeFlowError):
    """Login or session check failed"""
