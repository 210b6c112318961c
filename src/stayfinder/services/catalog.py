"""Demo catalog served when no live booking systems are configured."""

from __future__ import annotations

from typing import List

from stayfinder.models import CHECKFRONT, NIGHTSBRIDGE, PropertyListing


def _thumb(photo: str) -> str:
    return f"https://images.unsplash.com/{photo}?w=400&h=300&fit=crop"


DEMO_LISTINGS: List[PropertyListing] = [
    PropertyListing(
        id="nb-franschhoek-1",
        system=NIGHTSBRIDGE,
        name="Vineyard Escape Villa",
        location="Franschhoek, Western Cape",
        thumbnail=_thumb("photo-1564013799919-ab600027ffc6"),
        rate_from=2200,
        max_guests=8,
        description="Luxurious villa nestled in the heart of wine country with panoramic mountain views.",
        amenities=["WiFi", "Pool", "Braai", "Parking", "Wine Cellar"],
    ),
    PropertyListing(
        id="nb-franschhoek-2",
        system=NIGHTSBRIDGE,
        name="Mountain View Manor",
        location="Franschhoek, Western Cape",
        thumbnail=_thumb("photo-1600596542815-ffad4c1539a9"),
        rate_from=1800,
        max_guests=6,
        description="Elegant manor house with stunning mountain vistas and modern amenities.",
        amenities=["WiFi", "Pool", "Braai", "Parking", "Garden"],
    ),
    PropertyListing(
        id="nb-franschhoek-3",
        system=NIGHTSBRIDGE,
        name="Valley Retreat Cottage",
        location="Franschhoek, Western Cape",
        thumbnail=_thumb("photo-1600585154340-be6161a56a0c"),
        rate_from=1500,
        max_guests=4,
        description="Cozy cottage surrounded by vineyards, perfect for romantic getaways.",
        amenities=["WiFi", "Fireplace", "Braai", "Parking"],
    ),
    PropertyListing(
        id="nb-franschhoek-4",
        system=NIGHTSBRIDGE,
        name="Estate House Deluxe",
        location="Franschhoek, Western Cape",
        thumbnail=_thumb("photo-1613490493576-7fde63acd811"),
        rate_from=2100,
        max_guests=10,
        description="Grand estate house with luxury finishes and entertainment areas.",
        amenities=["WiFi", "Pool", "Braai", "Parking", "Tennis Court", "Cinema"],
    ),
    PropertyListing(
        id="nb-sedgefield-1",
        system=NIGHTSBRIDGE,
        name="Coastal Haven",
        location="Sedgefield, Western Cape",
        thumbnail=_thumb("photo-1512917774080-9991f1c4c750"),
        rate_from=1200,
        max_guests=4,
        description="Beach house with direct lagoon access and ocean views.",
        amenities=["WiFi", "Braai", "Parking", "Beach Access"],
    ),
    PropertyListing(
        id="nb-sedgefield-2",
        system=NIGHTSBRIDGE,
        name="Lagoon Lodge",
        location="Sedgefield, Western Cape",
        thumbnail=_thumb("photo-1580587771525-78b9dba3b914"),
        rate_from=1800,
        max_guests=8,
        description="Spacious lodge overlooking the tranquil lagoon waters.",
        amenities=["WiFi", "Pool", "Braai", "Parking", "Kayaks", "Beach Access"],
    ),
    PropertyListing(
        id="cf-knysna-1",
        system=CHECKFRONT,
        name="Forest Edge Estate",
        location="Knysna, Western Cape",
        thumbnail=_thumb("photo-1600047509807-ba8f99d2cdde"),
        rate_from=2500,
        max_guests=12,
        description="Luxury estate on the forest edge with spectacular lagoon views.",
        amenities=["WiFi", "Pool", "Braai", "Parking", "Jacuzzi", "Game Room"],
    ),
    PropertyListing(
        id="cf-knysna-2",
        system=CHECKFRONT,
        name="Waterfront Villa",
        location="Knysna, Western Cape",
        thumbnail=_thumb("photo-1600566753190-17f0baa2a6c3"),
        rate_from=2200,
        max_guests=8,
        description="Modern villa with private jetty and panoramic water views.",
        amenities=["WiFi", "Pool", "Braai", "Parking", "Boat Jetty"],
    ),
    PropertyListing(
        id="cf-plettenberg-1",
        system=CHECKFRONT,
        name="Ocean View Retreat",
        location="Plettenberg Bay, Western Cape",
        thumbnail=_thumb("photo-1600585154526-990dced4db0d"),
        rate_from=2400,
        max_guests=10,
        description="Stunning retreat with uninterrupted ocean views and private beach access.",
        amenities=["WiFi", "Pool", "Braai", "Parking", "Beach Access", "Gym"],
    ),
    PropertyListing(
        id="cf-plettenberg-2",
        system=CHECKFRONT,
        name="Bay House Luxury",
        location="Plettenberg Bay, Western Cape",
        thumbnail=_thumb("photo-1600607687939-ce8a6c25118c"),
        rate_from=1900,
        max_guests=6,
        description="Contemporary beach house with designer interiors.",
        amenities=["WiFi", "Braai", "Parking", "Beach Access"],
    ),
    PropertyListing(
        id="cf-hermanus-1",
        system=CHECKFRONT,
        name="Whale Watch Villa",
        location="Hermanus, Western Cape",
        thumbnail=_thumb("photo-1600607687644-aac4c3eac7f4"),
        rate_from=2100,
        max_guests=8,
        description="Prime whale-watching location with cliff-top position.",
        amenities=["WiFi", "Pool", "Braai", "Parking", "Ocean Views"],
    ),
    PropertyListing(
        id="cf-hermanus-2",
        system=CHECKFRONT,
        name="Cliff House Sanctuary",
        location="Hermanus, Western Cape",
        thumbnail=_thumb("photo-1600566753376-12c8ab7fb75b"),
        rate_from=2300,
        max_guests=10,
        description="Exclusive sanctuary perched on dramatic cliffs.",
        amenities=["WiFi", "Pool", "Braai", "Parking", "Spa", "Wine Cellar"],
    ),
    PropertyListing(
        id="cf-stellenbosch-1",
        system=CHECKFRONT,
        name="Oak Tree Estate",
        location="Stellenbosch, Western Cape",
        thumbnail=_thumb("photo-1600047509807-ba8f99d2cdde"),
        rate_from=1850,
        max_guests=7,
        description="Historic estate on working wine farm, offering authentic winelands experience.",
        amenities=["WiFi", "Pool", "Braai", "Parking", "Wine Tasting", "Air Con"],
    ),
]

