# hr/models/__init__.py
from .job import Job
from .employee import Employee
from .responsibility import Responsibility, ResponsibilityKRA
from .job_responsibility import JobResponsibility, JobResponsibilityKRA

__all__ = [
    "Job",
    "Employee",
    "Responsibility",
    "ResponsibilityKRA",
    "JobResponsibility",
    "JobResponsibilityKRA",
]
