"""The permanent cast of Zenith Teaching Hospital."""

from .models import Character

PREDEFINED_CHARACTERS = [
    # Consultants
    Character(name="Dr. Aituma", description="Consultant Obstetrician & Gynecologist"),
    Character(name="Dr. Adetunji", description="Consultant Paediatrician"),
    Character(name="Dr. Emeka", description="Consultant Psychiatrist"),
    Character(name='"Master"', description="Consultant Paediatric Surgeon"),
    # Administration
    Character(name="Dr. Victor", description="Chief Medical Director"),
    Character(name="Uju", description="Hospital Accountant"),
    Character(name="Rachael", description="IT Personnel"),
    # Nursing
    Character(name="Nurse Chidinma", description="Senior Nurse, veteran of the hospital"),
    # Registrars
    Character(name="Dr. Gregory", description="Registrar, bridge between consultants and interns"),
    # Interns (House Officers)
    Character(name="Dr. Precious", description="Intern (Female)"),
    Character(name="Dr. Glory", description="Intern (Female)"),
    Character(name="Dr. Ese", description="Intern (Female)"),
    Character(name="Dr. Addy", description="Intern (Female)"),
    Character(name="Dr. Efua", description="Intern (Male)"),
    Character(name="Dr. Harry", description="Intern (Male)"),
    Character(name="Dr. Douglas", description="Intern (Male)"),
    Character(name="Dr. Black", description="Intern (Male)"),
    Character(name="Dr. Osahon", description="Intern (Male)"),
]

DEFAULT_CAST = PREDEFINED_CHARACTERS[:2]


def resolve_cast(names, custom=()):
    """Look up predefined characters by name and append custom ones.

    ``custom`` holds ``(name, description)`` pairs. Unknown names become
    characters with an empty description.
    """
    by_name = {c.name.lower(): c for c in PREDEFINED_CHARACTERS}
    cast = [by_name.get(n.lower(), Character(name=n)) for n in names]
    cast.extend(Character(name=n, description=d) for n, d in custom)
    return cast
