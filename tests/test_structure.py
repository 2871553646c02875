"""Basic test to verify test infrastructure is working."""


def test_project_structure():
    """Verify that the project structure is set up correctly."""
    import orbitpath

    assert hasattr(orbitpath, "__version__")
    assert orbitpath.__version__ == "0.1.0"
