# base/company_context.py
from __future__ import annotations
from contextlib import contextmanager
from typing import Optional
from contextvars import ContextVar

# -------------------------------------------------
# Context Var (فعّالة لكل thread/task)
# -------------------------------------------------
_current_company_id: ContextVar[Optional[int]] = ContextVar("current_company_id", default=None)


def get_company_id() -> Optional[int]:
    return _current_company_id.get()


@contextmanager
def company_scope(company_id: Optional[int]):
    """
    تفعيل شركة لكتلة كود ثم استرجاع السياق السابق
    (للأوامر الإدارية حيث لا يوجد request).
    """
    token = _current_company_id.set(company_id)
    try:
        yield
    finally:
        _current_company_id.reset(token)
