from dataclasses import dataclass

from hydrim import Hydrator
from hydrim.reflection import FieldDescriptor


@dataclass
class Location:
    lat: float
    lng: float


@dataclass
class City:
    id: int
    name: str
    location: Location
    population: float


class CityHydrator(Hydrator):
    def resolve_value(
        self, field: FieldDescriptor, value, model: str = ""
    ):
        if field.name == "population":
            return round(value / 1_000_000, 2)
        return super().resolve_value(field, value, model=model)


def run():
    data = {
        "id": 5,
        "name": "Amsterdam",
        "location": {"lat": 52.37, "lng": 4.89},
        "population": 731200,
    }
    print(CityHydrator(cache=True).hydrate(City, data))


run()
