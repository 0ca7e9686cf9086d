# base/models/user.py
from __future__ import annotations
from django.db import models
from django.contrib.auth.models import AbstractUser, BaseUserManager
from .mixins import TimeStampedMixin, ActivableMixin


class UserManager(BaseUserManager):
    use_in_migrations = True

    def _create_user(self, email, password, **extra):
        if not email:
            raise ValueError("Users must have an email address")
        email = self.normalize_email(email).lower().strip()
        # AbstractUser يتطلب username كحقل، نولّده تلقائيًا إن لم يُمرّر
        extra.setdefault("username", email.split("@")[0])
        user = self.model(email=email, **extra)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_user(self, email, password=None, **extra):
        extra.setdefault("is_staff", False)
        extra.setdefault("is_superuser", False)
        return self._create_user(email, password, **extra)

    def create_superuser(self, email, password=None, **extra):
        extra.setdefault("is_staff", True)
        extra.setdefault("is_superuser", True)
        return self._create_user(email, password, **extra)

    def get_by_natural_key(self, email):
        """يسمح بالبحث عن المستخدم باستخدام EMAIL كحقل دخول."""
        return self.get(email__iexact=email.strip().lower())


class User(TimeStampedMixin, ActivableMixin, AbstractUser):
    """
    - تسجيل الدخول بالبريد (USERNAME_FIELD = email) مع بقاء username لأغراض Django
    - company (افتراضية) + companies (مسموح بها) على طريقة Odoo
    """
    email = models.EmailField(unique=True, db_index=True)

    company = models.ForeignKey("base.Company", on_delete=models.PROTECT,
                                related_name="users_default", null=True, blank=True)
    companies = models.ManyToManyField("base.Company", related_name="users", blank=True)

    objects = UserManager()

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["username"]

    class Meta:
        db_table = "user"
        ordering = ("-date_joined",)

    @property
    def company_ids(self):
        """الشركات المسموح بها + الافتراضية."""
        ids = set(self.companies.values_list("id", flat=True))
        if self.company_id:
            ids.add(self.company_id)
        return ids

    @property
    def display_name(self) -> str:
        full = self.get_full_name().strip()
        return full or self.email

    def __str__(self):
        return self.display_name

    def save(self, *args, **kwargs):
        if self.email:
            self.email = self.email.strip().lower()
        super().save(*args, **kwargs)
