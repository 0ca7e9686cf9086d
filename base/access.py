# file: base/access.py

from django.contrib.auth import get_user_model
from django.apps import apps

Employee = apps.get_model("hr", "Employee")

User = get_user_model()


# ============================================================
# Helper functions
# ============================================================

def get_employee(user: User, company_id=None):
    """
    Retrieve the HR employee record linked to this user
    (inside company_id when given; a user may hold one employee per company).
    """
    if not user or not user.is_authenticated:
        return None
    qs = Employee.all_objects.filter(user=user, active=True)
    if company_id:
        qs = qs.filter(company_id=company_id)
    return qs.order_by("id").first()


def is_in_same_company(user: User, company_id):
    """
    Check if user belongs to the company.
    user.company_ids = ManyToMany on User (+ default company)
    """
    if not user or not user.is_authenticated:
        return False
    if not company_id:
        return False
    return company_id in user.company_ids


# ============================================================
# Manager chain helpers
# ============================================================

def user_is_in_manager_chain(user: User, employee: Employee) -> bool:
    """
    True if user manages the employee directly or through any ancestor manager.
    """
    emp = get_employee(user, employee.company_id)
    if not emp:
        return False

    seen = set()
    current = employee.manager
    while current and current.id not in seen:
        if current.id == emp.id:
            return True
        seen.add(current.id)
        current = current.manager

    return False
