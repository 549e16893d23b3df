import factory
from django.contrib.auth import get_user_model

from accounts.models import Address


class UserFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = get_user_model()
        django_get_or_create = ("username",)

    username = factory.Sequence(lambda n: f"user{n}")
    email = factory.LazyAttribute(lambda o: f"{o.username}@example.com")
    is_active = True

    @factory.post_generation
    def password(self, create, extracted, **kwargs):
        raw = extracted or "password123!"
        self.set_password(raw)
        if create:
            self.save(update_fields=["password"])


class AddressFactory(factory.django.DjangoModelFactory):
    """Defaults to a default address inside the local area (Uberlândia)."""

    class Meta:
        model = Address

    user = factory.SubFactory(UserFactory)
    cep = "38400-100"
    street = factory.Sequence(lambda n: f"Rua {n}")
    number = "100"
    neighborhood = "Centro"
    city = "Uberlândia"
    state = "MG"
    is_default = True

    class Params:
        national = factory.Trait(cep="01310-100", city="São Paulo", state="SP")
