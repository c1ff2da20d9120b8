"""Inventory constants - legal and catalogue reference data.

Rating scale, room and element catalogue, key and meter types, vétusté grid
and lease deposit rules. Values follow the Décret n°2016-382 du 30 mars 2016
(état des lieux) and the usual FNAIM / HLM collective-agreement wear grid.
"""

from typing import TypedDict


class RatingEntry(TypedDict):
    """Type definition for a rating scale entry."""
    label: str
    short_label: str
    description: str


class WearGridEntry(TypedDict):
    """Type definition for a material line of the wear grid (in years)."""
    lifespan: int
    franchise: int
    residual: int
    label: str


# =====================================================
# RATING SCALE (1 = worst, 5 = best)
# =====================================================

RATING_MIN = 1
RATING_MAX = 5

RATING_SCALE: dict[int, RatingEntry] = {
    5: {"label": "Neuf", "short_label": "N", "description": "État parfait, aucun défaut visible"},
    4: {"label": "Très bon", "short_label": "TB", "description": "Quelques traces d'usage négligeables"},
    3: {"label": "Bon", "short_label": "B", "description": "Traces d'usage normales"},
    2: {"label": "Moyen", "short_label": "M", "description": "Usure visible, usage passable"},
    1: {"label": "Mauvais", "short_label": "MV", "description": "Dégradations, réparations nécessaires"},
}

# =====================================================
# ROOMS
# =====================================================

ROOM_TYPES: dict[str, dict] = {
    "entrance": {"label": "Entrée / Couloir", "default_elements": ["floor", "wall", "ceiling", "door", "electrical"]},
    "living_room": {"label": "Séjour / Salon", "default_elements": ["floor", "wall", "ceiling", "door", "window", "shutter", "electrical", "heating"]},
    "dining_room": {"label": "Salle à manger", "default_elements": ["floor", "wall", "ceiling", "door", "window", "electrical", "heating"]},
    "kitchen": {"label": "Cuisine", "default_elements": ["floor", "wall", "ceiling", "door", "window", "electrical", "plumbing", "appliance"]},
    "bedroom": {"label": "Chambre", "default_elements": ["floor", "wall", "ceiling", "door", "window", "shutter", "electrical", "heating"]},
    "bathroom": {"label": "Salle de bain", "default_elements": ["floor", "wall", "ceiling", "door", "window", "electrical", "plumbing"]},
    "toilet": {"label": "WC", "default_elements": ["floor", "wall", "ceiling", "door", "electrical", "plumbing"]},
    "office": {"label": "Bureau", "default_elements": ["floor", "wall", "ceiling", "door", "window", "electrical", "heating"]},
    "laundry": {"label": "Buanderie", "default_elements": ["floor", "wall", "ceiling", "door", "electrical", "plumbing"]},
    "storage": {"label": "Rangement / Dressing", "default_elements": ["floor", "wall", "ceiling", "door", "electrical"]},
    "balcony": {"label": "Balcon", "default_elements": ["floor", "wall", "door", "electrical"]},
    "terrace": {"label": "Terrasse", "default_elements": ["floor", "wall", "electrical"]},
    "garden": {"label": "Jardin", "default_elements": ["other"]},
    "garage": {"label": "Garage", "default_elements": ["floor", "wall", "ceiling", "door", "electrical"]},
    "cellar": {"label": "Cave", "default_elements": ["floor", "wall", "ceiling", "door", "electrical"]},
    "attic": {"label": "Grenier / Combles", "default_elements": ["floor", "wall", "ceiling", "door", "electrical"]},
    "basement": {"label": "Sous-sol", "default_elements": ["floor", "wall", "ceiling", "door", "electrical"]},
    "technical_room": {"label": "Local technique", "default_elements": ["floor", "wall", "ceiling", "door", "electrical", "plumbing", "heating"]},
    "parking": {"label": "Parking", "default_elements": ["floor", "other"]},
    "other": {"label": "Autre", "default_elements": ["floor", "wall", "ceiling", "door", "electrical"]},
}

FALLBACK_ROOM_ELEMENTS = ["floor", "wall", "ceiling"]

CATEGORY_LABELS: dict[str, str] = {
    "floor": "Sol",
    "wall": "Mur",
    "ceiling": "Plafond",
    "door": "Porte / Menuiserie",
    "window": "Fenêtre / Vitrage",
    "shutter": "Volet / Store",
    "electrical": "Électricité",
    "heating": "Chauffage",
    "plumbing": "Plomberie",
    "appliance": "Électroménager",
    "furniture": "Mobilier",
    "other": "Autre",
}

# =====================================================
# KEYS AND METERS
# =====================================================

KEY_TYPES: dict[str, str] = {
    "porte_entree": "Porte d'entrée",
    "porte_immeuble": "Porte d'immeuble",
    "boite_lettres": "Boîte aux lettres",
    "cave": "Cave",
    "garage": "Garage",
    "parking": "Parking",
    "local_velo": "Local vélo",
    "portail": "Portail",
    "badge": "Badge",
    "telecommande": "Télécommande",
    "digicode": "Digicode",
    "autre": "Autre",
}

# Form pre-fill
DEFAULT_KEYS = [
    {"key_type": "porte_entree", "quantity": 2, "notes": ""},
    {"key_type": "porte_immeuble", "quantity": 1, "notes": ""},
    {"key_type": "boite_lettres", "quantity": 1, "notes": ""},
]

METER_UNITS: dict[str, str] = {
    "water_cold": "m³",
    "water_hot": "m³",
    "electricity_hp": "kWh",
    "electricity_hc": "kWh",
    "gas": "m³",
}

# =====================================================
# VÉTUSTÉ
# =====================================================

# Category defaults (linear curve), in months
CATEGORY_LIFETIME_MONTHS: dict[str, int] = {
    "floor": 120,
    "wall": 84,
    "ceiling": 120,
    "door": 240,
    "window": 300,
    "shutter": 180,
    "electrical": 360,
    "heating": 180,
    "plumbing": 180,
    "appliance": 120,
    "furniture": 144,
    "other": 180,
}

# Material grid (franchise curve), in years
MATERIAL_WEAR_GRID: dict[str, WearGridEntry] = {
    # Sols
    "parquet_massif": {"lifespan": 25, "franchise": 5, "residual": 15, "label": "Parquet massif"},
    "parquet_stratifie": {"lifespan": 15, "franchise": 3, "residual": 10, "label": "Parquet stratifié"},
    "parquet_flottant": {"lifespan": 15, "franchise": 3, "residual": 10, "label": "Parquet flottant"},
    "carrelage": {"lifespan": 25, "franchise": 5, "residual": 15, "label": "Carrelage"},
    "moquette": {"lifespan": 7, "franchise": 1, "residual": 0, "label": "Moquette"},
    "lino_pvc": {"lifespan": 10, "franchise": 2, "residual": 0, "label": "Lino / PVC"},
    "beton_cire": {"lifespan": 20, "franchise": 3, "residual": 10, "label": "Béton ciré"},
    "tomettes": {"lifespan": 30, "franchise": 5, "residual": 20, "label": "Tomettes"},
    # Murs
    "peinture": {"lifespan": 7, "franchise": 1, "residual": 0, "label": "Peinture murale"},
    "papier_peint": {"lifespan": 7, "franchise": 1, "residual": 0, "label": "Papier peint"},
    "carrelage_mural": {"lifespan": 20, "franchise": 3, "residual": 15, "label": "Carrelage mural"},
    "faience": {"lifespan": 20, "franchise": 3, "residual": 15, "label": "Faïence"},
    "lambris": {"lifespan": 15, "franchise": 2, "residual": 10, "label": "Lambris"},
    # Plafonds
    "peinture_plafond": {"lifespan": 10, "franchise": 2, "residual": 0, "label": "Peinture plafond"},
    "dalles": {"lifespan": 15, "franchise": 2, "residual": 0, "label": "Dalles plafond"},
    "moulures": {"lifespan": 30, "franchise": 5, "residual": 20, "label": "Moulures"},
    # Menuiseries
    "porte_entree": {"lifespan": 25, "franchise": 5, "residual": 20, "label": "Porte d'entrée"},
    "porte_interieure": {"lifespan": 20, "franchise": 3, "residual": 15, "label": "Porte intérieure"},
    "placard": {"lifespan": 20, "franchise": 3, "residual": 10, "label": "Placard"},
    "plinthes": {"lifespan": 15, "franchise": 2, "residual": 10, "label": "Plinthes"},
    # Fenêtres
    "fenetre_pvc": {"lifespan": 25, "franchise": 5, "residual": 15, "label": "Fenêtre PVC"},
    "fenetre_bois": {"lifespan": 30, "franchise": 5, "residual": 20, "label": "Fenêtre bois"},
    "fenetre_alu": {"lifespan": 30, "franchise": 5, "residual": 20, "label": "Fenêtre aluminium"},
    "double_vitrage": {"lifespan": 25, "franchise": 5, "residual": 15, "label": "Double vitrage"},
    # Volets
    "volet_roulant": {"lifespan": 15, "franchise": 3, "residual": 10, "label": "Volet roulant"},
    "volet_battant": {"lifespan": 20, "franchise": 3, "residual": 15, "label": "Volet battant"},
    "store_interieur": {"lifespan": 10, "franchise": 2, "residual": 0, "label": "Store intérieur"},
    # Électricité
    "prise": {"lifespan": 30, "franchise": 5, "residual": 20, "label": "Prise électrique"},
    "interrupteur": {"lifespan": 30, "franchise": 5, "residual": 20, "label": "Interrupteur"},
    "luminaire": {"lifespan": 15, "franchise": 2, "residual": 10, "label": "Luminaire"},
    "tableau_electrique": {"lifespan": 35, "franchise": 5, "residual": 25, "label": "Tableau électrique"},
    # Chauffage
    "radiateur_electrique": {"lifespan": 15, "franchise": 3, "residual": 10, "label": "Radiateur électrique"},
    "radiateur_eau": {"lifespan": 25, "franchise": 5, "residual": 15, "label": "Radiateur eau"},
    "chaudiere_gaz": {"lifespan": 20, "franchise": 5, "residual": 10, "label": "Chaudière gaz"},
    "chauffe_eau": {"lifespan": 12, "franchise": 3, "residual": 0, "label": "Chauffe-eau"},
    "climatisation": {"lifespan": 15, "franchise": 3, "residual": 10, "label": "Climatisation"},
    "thermostat": {"lifespan": 15, "franchise": 2, "residual": 10, "label": "Thermostat"},
    # Plomberie
    "robinetterie": {"lifespan": 12, "franchise": 2, "residual": 0, "label": "Robinetterie"},
    "evier": {"lifespan": 20, "franchise": 3, "residual": 15, "label": "Évier"},
    "lavabo": {"lifespan": 20, "franchise": 3, "residual": 15, "label": "Lavabo"},
    "baignoire": {"lifespan": 25, "franchise": 5, "residual": 15, "label": "Baignoire"},
    "douche_bac": {"lifespan": 20, "franchise": 3, "residual": 10, "label": "Receveur douche"},
    "paroi_douche": {"lifespan": 15, "franchise": 2, "residual": 10, "label": "Paroi douche"},
    "wc": {"lifespan": 25, "franchise": 5, "residual": 15, "label": "WC"},
    "joints_silicone": {"lifespan": 5, "franchise": 0, "residual": 0, "label": "Joints silicone"},
    "vmc": {"lifespan": 15, "franchise": 3, "residual": 10, "label": "VMC"},
    # Électroménager
    "refrigerateur": {"lifespan": 10, "franchise": 2, "residual": 0, "label": "Réfrigérateur"},
    "congelateur": {"lifespan": 10, "franchise": 2, "residual": 0, "label": "Congélateur"},
    "lave_linge": {"lifespan": 8, "franchise": 1, "residual": 0, "label": "Lave-linge"},
    "lave_vaisselle": {"lifespan": 8, "franchise": 1, "residual": 0, "label": "Lave-vaisselle"},
    "seche_linge": {"lifespan": 8, "franchise": 1, "residual": 0, "label": "Sèche-linge"},
    "four": {"lifespan": 12, "franchise": 2, "residual": 0, "label": "Four"},
    "micro_ondes": {"lifespan": 8, "franchise": 1, "residual": 0, "label": "Micro-ondes"},
    "plaque_cuisson": {"lifespan": 12, "franchise": 2, "residual": 0, "label": "Plaque de cuisson"},
    "hotte": {"lifespan": 10, "franchise": 2, "residual": 0, "label": "Hotte"},
    # Mobilier
    "lit": {"lifespan": 15, "franchise": 2, "residual": 10, "label": "Lit"},
    "matelas": {"lifespan": 10, "franchise": 2, "residual": 0, "label": "Matelas"},
    "canape": {"lifespan": 12, "franchise": 2, "residual": 10, "label": "Canapé"},
    "table": {"lifespan": 15, "franchise": 2, "residual": 15, "label": "Table"},
    "chaise": {"lifespan": 12, "franchise": 2, "residual": 10, "label": "Chaise"},
    "meuble_rangement": {"lifespan": 15, "franchise": 2, "residual": 15, "label": "Meuble de rangement"},
}

# =====================================================
# LEASES
# =====================================================

# Loi n°89-462, art. 22 and bail mobilité (loi ELAN)
LEASE_LEGAL_RULES: dict[str, dict] = {
    "unfurnished": {"label": "Non meublé", "max_deposit_months": 1},
    "furnished": {"label": "Meublé", "max_deposit_months": 2},
    "student": {"label": "Étudiant meublé", "max_deposit_months": 2},
    "mobility": {"label": "Bail mobilité", "max_deposit_months": 0},
}
