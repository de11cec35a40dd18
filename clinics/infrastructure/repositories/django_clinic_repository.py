"""
Django implementation of ClinicRepository port.

Register, approve, toggle and delete each run in one transaction with
the clinic row locked.
"""
import uuid
from datetime import datetime
from typing import List, Optional, Tuple

from asgiref.sync import sync_to_async

from accounts.domain.user import User
from accounts.infrastructure.models import User as UserModel
from accounts.infrastructure.repositories.django_user_repository import DjangoUserRepository
from clinics.domain.clinic import Clinic, ClinicProfile
from clinics.infrastructure.models import Clinic as ClinicModel
from clinics.ports.clinic_repository import ClinicRepository
from core.domain.dates import utcnow
from core.domain.exceptions import ClinicNotFoundError, DuplicateError, DuplicateSerialError
from core.domain.value_objects import LicenseStatus, ProductType, RegistrationStatus
from core.infrastructure.database import atomic_sync_to_async
from licenses.domain.license import License
from licenses.domain.services import LicenseIssuer
from licenses.infrastructure.models import License as LicenseModel
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository
from plans.domain.plan import Plan


class DjangoClinicRepository(ClinicRepository):
    """
    Django ORM implementation of ClinicRepository.

    License and user rows are mapped with the licenses and accounts
    adapters so every app keeps a single conversion routine.
    """

    def __init__(self):
        self.licenses = DjangoLicenseRepository()
        self.users = DjangoUserRepository()

    def _to_domain(self, model: ClinicModel) -> Clinic:
        """
        Convert Django model to domain entity.

        Args:
            model: Django Clinic model

        Returns:
            Clinic domain entity
        """
        return Clinic(
            id=model.id,
            name=model.name,
            email=model.email,
            hwid=model.hwid,
            status=RegistrationStatus(model.status),
            created_at=model.created_at,
            updated_at=model.updated_at,
            doctor_name=model.doctor_name,
            phone=model.phone,
            address=model.address,
            system_version=model.system_version,
            license_id=model.license_id,
        )

    def _profile(self, model: ClinicModel) -> ClinicProfile:
        # pylint: disable=protected-access
        license_model = model.license
        return ClinicProfile(
            clinic=self._to_domain(model),
            license=self.licenses._to_domain(license_model) if license_model else None,
            users=[self.users._to_domain(user) for user in model.users.all()],
        )

    def _lock(self, clinic_id: uuid.UUID) -> ClinicModel:
        try:
            return ClinicModel.objects.select_for_update().get(id=clinic_id)
        except ClinicModel.DoesNotExist as e:
            raise ClinicNotFoundError() from e

    @atomic_sync_to_async
    def register(self, clinic: Clinic, admin: User, password: str) -> ClinicProfile:
        """
        Insert a pending clinic together with its administrator user.

        Raises:
            DuplicateError: If the clinic email, clinic hwid or user email is taken
        """
        if ClinicModel.objects.filter(email__iexact=clinic.email).exists():
            raise DuplicateError("Clinic already registered with this email", code="DUPLICATE_CLINIC_EMAIL")
        if ClinicModel.objects.filter(hwid=clinic.hwid).exists():
            raise DuplicateError("Clinic already registered with this Hardware ID", code="DUPLICATE_HWID")

        model = ClinicModel.objects.create(
            id=clinic.id,
            name=clinic.name,
            doctor_name=clinic.doctor_name,
            email=clinic.email,
            phone=clinic.phone,
            address=clinic.address,
            hwid=clinic.hwid,
            system_version=clinic.system_version,
            status=clinic.status.value,
            created_at=clinic.created_at,
        )
        self.users.create_sync(admin, password)
        return self._profile(model)

    @sync_to_async
    def find_by_id(self, clinic_id: uuid.UUID) -> Optional[Clinic]:
        """
        Find a clinic by ID.

        Args:
            clinic_id: Clinic UUID

        Returns:
            Clinic entity or None if not found
        """
        try:
            return self._to_domain(ClinicModel.objects.get(id=clinic_id))
        except ClinicModel.DoesNotExist:
            return None

    @sync_to_async
    def find_by_license_id(self, license_id: uuid.UUID) -> Optional[Clinic]:
        model = ClinicModel.objects.filter(license_id=license_id).first()
        return self._to_domain(model) if model else None

    @sync_to_async
    def get_profile(self, clinic_id: uuid.UUID) -> Optional[ClinicProfile]:
        model = (
            ClinicModel.objects.select_related("license")
            .prefetch_related("users")
            .filter(id=clinic_id)
            .first()
        )
        return self._profile(model) if model else None

    @sync_to_async
    def list_profiles(self, status: Optional[RegistrationStatus] = None) -> List[ClinicProfile]:
        queryset = ClinicModel.objects.select_related("license").prefetch_related("users")
        if status is not None:
            queryset = queryset.filter(status=status.value)
        return [self._profile(model) for model in queryset.order_by("-created_at")]

    @atomic_sync_to_async
    def approve(self, clinic_id: uuid.UUID, plan: Plan, now: Optional[datetime] = None) -> ClinicProfile:
        """
        Approve a clinic and issue its license in one transaction.

        Raises:
            ClinicNotFoundError: If the clinic does not exist
            ClinicAlreadyApprovedError: If the clinic is already approved
            DuplicateSerialError: If no unique serial could be allocated
        """
        now = now or utcnow()
        model = self._lock(clinic_id)
        clinic = self._to_domain(model)

        clinic.ensure_approvable()

        license = self._issue_license(plan, clinic.name, now)
        approved = clinic.approve(license_id=license.id)

        model.status = approved.status.value
        model.license_id = license.id
        model.save(update_fields=["status", "license", "updated_at"])
        UserModel.objects.filter(clinic_id=clinic_id).update(status=RegistrationStatus.APPROVED.value)

        model.refresh_from_db()
        return self._profile(model)

    def _issue_license(self, plan: Plan, customer_name: str, now: datetime) -> License:
        for candidate in LicenseIssuer.candidates(
            plan,
            customer_name,
            product_type=ProductType.CLINIC,
            status=LicenseStatus.ACTIVE,
            now=now,
        ):
            try:
                return self.licenses.insert_sync(candidate)
            except DuplicateSerialError:
                continue
        raise DuplicateSerialError()

    @atomic_sync_to_async
    def reject(self, clinic_id: uuid.UUID) -> Clinic:
        """
        Reject a pending clinic and its users.

        Raises:
            ClinicNotFoundError: If the clinic does not exist
            InvalidClinicStatusError: If the clinic is not pending
        """
        model = self._lock(clinic_id)
        rejected = self._to_domain(model).reject()
        model.status = rejected.status.value
        model.save(update_fields=["status", "updated_at"])
        UserModel.objects.filter(clinic_id=clinic_id).update(status=rejected.status.value)
        return self._to_domain(model)

    @atomic_sync_to_async
    def toggle_suspension(self, clinic_id: uuid.UUID) -> Tuple[Clinic, Optional[License]]:
        """
        Suspend or reinstate a clinic; its users and license follow.

        Raises:
            ClinicNotFoundError: If the clinic does not exist
            InvalidClinicStatusError: If the clinic is pending or rejected
        """
        model = self._lock(clinic_id)
        toggled = self._to_domain(model).toggle_suspension()
        model.status = toggled.status.value
        model.save(update_fields=["status", "updated_at"])
        UserModel.objects.filter(clinic_id=clinic_id).update(status=toggled.status.value)

        license = None
        if model.license_id:
            # pylint: disable=protected-access
            license_model = LicenseModel.objects.select_for_update().get(id=model.license_id)
            license = self.licenses._to_domain(license_model)
            if license.status != LicenseStatus.REVOKED:
                if toggled.status == RegistrationStatus.SUSPENDED:
                    license = license.pause()
                else:
                    license = license.resume()
                self.licenses._apply(license_model, license)
                license_model.save()
                license = self.licenses._to_domain(license_model)

        return self._to_domain(model), license

    @atomic_sync_to_async
    def delete(self, clinic_id: uuid.UUID) -> Optional[Clinic]:
        """
        Delete a clinic with its license and users.

        Returns:
            The deleted clinic, or None if not found
        """
        model = ClinicModel.objects.select_for_update().filter(id=clinic_id).first()
        if model is None:
            return None
        clinic = self._to_domain(model)
        if model.license_id:
            LicenseModel.objects.filter(id=model.license_id).delete()
        UserModel.objects.filter(clinic_id=clinic_id).delete()
        model.delete()
        return clinic
