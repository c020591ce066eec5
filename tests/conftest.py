import pytest

from mirsa.keys import derive_keys


@pytest.fixture
def keyset():
    # modulus 4295229443 > 0xFFFFFFFF, so every 4-byte chunk fits
    return derive_keys(65537, 65539)


@pytest.fixture
def pair(keyset):
    return keyset.pair
