import json
from dataclasses import dataclass
from typing import List, Optional

from hydrim import Hydrator, register


@register
@dataclass
class Country:
    code: str
    name: str


@dataclass
class City:
    id: int
    name: str
    country: Country
    district: Optional[str]
    population: int = 0
    aliases: Optional[List[str]] = None


PAYLOAD = """
[
    {
        "id": 1,
        "name": "Kabul",
        "country": {"code": "AFG", "name": "Afghanistan"},
        "district": "Kabol",
        "population": 1780000
    },
    {
        "id": 2,
        "name": "Qandahar",
        "country": {"code": "AFG", "name": "Afghanistan"}
    }
]
"""


def run():
    hydrator = Hydrator()
    cities = hydrator.hydrate(City, json.loads(PAYLOAD), as_list=True)
    for city in cities:
        print(city)

    print(hydrator.hydrate("Country", {"code": "NLD", "name": "Netherlands"}))


run()
