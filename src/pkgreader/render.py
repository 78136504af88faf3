"""Turning parsed records back into control-style fields for display."""

from collections.abc import Iterator

from debian import deb822

from pkgreader.models.package import Package


def control_fields(package: Package) -> Iterator[tuple[str, str]]:
    """Yield ``(field name, value)`` for every field set on ``package``, in control file order."""
    relations = (
        ("Depends", package.depends),
        ("Pre-Depends", package.pre_depends),
        ("Recommends", package.recommends),
        ("Suggests", package.suggests),
        ("Provides", package.provides),
        ("Replaces", package.replaces),
        ("Conflicts", package.conflicts),
    )
    scalars = (
        ("Status", package.status),
        ("Section", package.section),
        ("Priority", package.priority),
        ("Essential", "yes" if package.essential else None),
        ("Auto-Installed", "yes" if package.auto_installed else None),
        ("Source", package.source),
        ("Tags", package.tags),
        ("Filename", package.filename),
        ("Size", package.size),
        ("MD5sum", package.md5sum),
        ("SHA256sum", package.sha256sum),
    )

    for name, value in (
        ("Package", package.name),
        ("Version", package.full_version),
        ("Architecture", package.architecture),
        ("Maintainer", package.maintainer),
        ("Installed-Size", package.installed_size),
        ("Installed-Time", package.installed_time),
    ):
        if value is not None:
            yield name, str(value)

    for name, items in relations:
        if items:
            yield name, ", ".join(items)

    for name, value in scalars:
        if value is not None:
            yield name, str(value)

    if package.conffiles:
        yield "Conffiles", "".join(f"\n {conffile}" for conffile in package.conffiles)
    if package.description is not None:
        yield "Description", package.description


def to_deb822(package: Package) -> deb822.Deb822:
    """Build a python-debian paragraph holding the record's fields."""
    paragraph = deb822.Deb822()
    for name, value in control_fields(package):
        paragraph[name] = value
    return paragraph
