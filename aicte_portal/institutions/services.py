from .models import Institution


def get_institution_for(user) -> Institution | None:
    """Return the institution profile owned by ``user``, if any."""
    if not user or not user.is_authenticated:
        return None
    return Institution.objects.filter(user=user).first()
