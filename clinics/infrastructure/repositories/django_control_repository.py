"""
Django implementation of ClinicControlRepository port.
"""
import uuid

from asgiref.sync import sync_to_async

from clinics.domain.controls import DEFAULT_FEATURES, ClinicControl
from clinics.infrastructure.models import ClinicControl as ClinicControlModel
from clinics.ports.control_repository import ClinicControlRepository


class DjangoClinicControlRepository(ClinicControlRepository):
    """Django ORM implementation of ClinicControlRepository."""

    def _to_domain(self, model: ClinicControlModel) -> ClinicControl:
        return ClinicControl(
            clinic_id=model.clinic_id,
            storage_limit_mb=model.storage_limit_mb,
            users_limit=model.users_limit,
            patients_limit=model.patients_limit,
            features={**DEFAULT_FEATURES, **(model.features or {})},
            locked=model.locked,
            lock_reason=model.lock_reason,
        )

    @sync_to_async
    def get_or_create(self, clinic_id: uuid.UUID) -> ClinicControl:
        """Return the clinic's controls, creating the defaults if absent."""
        defaults = ClinicControl.defaults(clinic_id)
        model, _ = ClinicControlModel.objects.get_or_create(
            clinic_id=clinic_id,
            defaults={
                "storage_limit_mb": defaults.storage_limit_mb,
                "users_limit": defaults.users_limit,
                "patients_limit": defaults.patients_limit,
                "features": dict(defaults.features),
                "locked": defaults.locked,
                "lock_reason": defaults.lock_reason,
            },
        )
        return self._to_domain(model)

    @sync_to_async
    def save(self, control: ClinicControl) -> ClinicControl:
        model, _ = ClinicControlModel.objects.update_or_create(
            clinic_id=control.clinic_id,
            defaults={
                "storage_limit_mb": control.storage_limit_mb,
                "users_limit": control.users_limit,
                "patients_limit": control.patients_limit,
                "features": dict(control.features),
                "locked": control.locked,
                "lock_reason": control.lock_reason,
            },
        )
        return self._to_domain(model)
