def _get_version() -> str:
    from pathlib import Path

    import versioningit

    import dwfkit

    assert dwfkit.__file__ is not None
    project_dir = Path(dwfkit.__file__).parent.parent.parent
    return versioningit.get_version(
        project_dir=project_dir, config={"default-version": "0.1.0"}
    )


__version__ = _get_version()
