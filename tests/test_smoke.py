def test_publisher_imports():
    """Verify all publisher submodules can be imported without errors."""
    import publisher
    import publisher.analyzer
    import publisher.cli
    import publisher.core
    import publisher.packaging
    import publisher.pipeline
    import publisher.remote
    import publisher.resolver
    import publisher.sandbox

    assert publisher is not None
