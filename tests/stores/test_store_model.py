import pytest
from django.core.exceptions import ValidationError

from stores.models import UNASSIGNED_STORE_NAME, Store


@pytest.mark.django_db
class TestStoreModel:
    def test_clean_trims_name(self):
        store = Store(name="  판교점  ")

        store.full_clean()

        assert store.name == "판교점"

    def test_reserved_label(self):
        with pytest.raises(ValidationError):
            Store(name=UNASSIGNED_STORE_NAME).full_clean()

    def test_blank_name(self):
        with pytest.raises(ValidationError):
            Store(name="   ").full_clean()
