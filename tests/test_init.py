import hydrim


def test_public_surface():
    for name in hydrim.__all__:
        assert hasattr(hydrim, name)


def test_version():
    assert hydrim.__version__


def test_errors_share_a_base():
    for error in (
        hydrim.RequiredFieldMissingError,
        hydrim.TypeNotFoundError,
        hydrim.UnresolvableFieldTypeError,
    ):
        assert issubclass(error, hydrim.HydrimError)
