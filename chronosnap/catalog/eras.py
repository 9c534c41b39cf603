"""
Purpose:
- Static catalog of eras and scenes, loaded once at import and never mutated.
- Display names are Spanish (what the user reads); prompts stay English for the model.
"""

from __future__ import annotations
from typing import Dict, List, Optional, Tuple
from .schema import Era, Scene

def _era(id: str, name: str, *scenes: Tuple[str, str, str, str]) -> Era:
    return Era(id=id, display_name=name, scenes=tuple(Scene.cataloged(*s) for s in scenes))

ERAS: Tuple[Era, ...] = (
    _era(
        "ancient-egypt", "Antiguo Egipto",
        ("pyramids", "Construyendo las Pirámides",
         "standing in front of the Great Sphinx and Pyramids of Giza in Ancient Egypt, wearing traditional linen Egyptian clothing, golden sunlight, desert sands",
         "Landmark"),
        ("pharaoh", "Trono del Faraón",
         "sitting on a golden throne in an Ancient Egyptian palace, wearing a pharaoh headdress and jewelry, surrounded by hieroglyphs and luxury",
         "Crown"),
        ("nile", "Navegando el Nilo",
         "standing on a wooden reed boat sailing down the Nile River in Ancient Egypt, lush palm trees on the banks, sunset",
         "Sailboat"),
    ),
    _era(
        "renaissance", "El Renacimiento",
        ("artist", "Estudio de Arte",
         "posing in a Renaissance art studio in Florence, holding a paint palette, wearing velvet renaissance clothing, sunlight streaming through window",
         "Palette"),
        ("venice", "Góndola en Venecia",
         "riding a gondola in 16th century Venice canals, wearing masquerade ball attire, historic architecture, water reflections",
         "Ship"),
        ("library", "Biblioteca Antigua",
         "reading a scroll in a grand Renaissance library with high ceilings and endless books, wearing scholarly robes",
         "Book"),
    ),
    _era(
        "victorian", "Inglaterra Victoriana",
        ("street", "Calles de Londres",
         "standing on a cobblestone street in Victorian London, foggy atmosphere, gas lamps glowing, wearing a top hat and coat or victorian dress",
         "Building"),
        ("tea", "Hora del Té",
         "sitting in a lush Victorian garden having high tea, porcelain cups, wearing elegant lace Victorian fashion",
         "Coffee"),
        ("train", "Estación de Vapor",
         "standing next to a massive steam train engine in a Victorian station, smoke and steam, industrial vibe, steampunk elements",
         "Train"),
    ),
    _era(
        "roaring-20s", "Los Años 20",
        ("jazz", "Club de Jazz",
         "in a lively 1920s speakeasy jazz club, Art Deco decorations, wearing a flapper dress or tuxedo, moody lighting",
         "Music"),
        ("car", "Coche Clásico",
         "leaning against a vintage 1920s luxury car, city street at night, Great Gatsby style glamour",
         "Car"),
    ),
    _era(
        "environments", "Ambientes y Ocio",
        ("mountain", "Montaña",
         "standing on a snowy mountain peak, wearing high-tech winter gear, breathtaking alpine view, blue sky",
         "Mountain"),
        ("forest", "Bosque",
         "walking through a mystical ancient forest, dappled sunlight through tall trees, ferns, nature aesthetic",
         "Trees"),
        ("boardwalk", "Paseo Marítimo",
         "walking on a sunny beach boardwalk, ocean waves in background, summer vibes, casual beachwear, seagulls",
         "Sun"),
        ("mall", "Centro Comercial",
         "standing in a massive futuristic shopping mall atrium, glass roof, escalators, busy atmosphere, holding shopping bags",
         "ShoppingBag"),
        ("concert", "Concierto",
         "on stage at a massive rock concert, bright spotlights, crowd cheering in background, holding a microphone or guitar",
         "Mic"),
        ("gym", "Gimnasio",
         "working out in a high-end modern gym, lifting weights, wearing athletic sportswear, mirrors and equipment background",
         "Dumbbell"),
    ),
)

def all_scenes() -> List[Scene]:
    return [s for era in ERAS for s in era.scenes]

_BY_ID: Dict[str, Scene] = {s.id: s for s in all_scenes()}

def find_scene(scene_id: str) -> Optional[Scene]:
    return _BY_ID.get(scene_id)
