"""Static crystal catalog.

The storefront lists and filters this in-memory catalog; the database keeps a
synced copy of each product together with its stock level.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from celestial_crystals.core.models.domain.enums import Rarity


class ChakraStone(BaseModel):
    stone: str
    color: str
    properties: List[str]
    benefits: str


class LavaStoneProperties(BaseModel):
    origin: str
    properties: List[str]
    benefits: str
    aromatherapy: Optional[str] = None


class CatalogCrystal(BaseModel):
    """A sellable crystal bracelet as described in the catalog."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
    price: float = Field(ge=0)
    properties: List[str]
    colors: List[str]
    category: str
    chakra: str
    zodiac_signs: List[str]
    birth_months: List[int]
    element: str
    hardness: str
    origin: str
    rarity: Rarity
    image: Optional[str] = None
    images: List[str] = Field(default_factory=list)
    chakra_stones: Optional[Dict[str, ChakraStone]] = None
    lava_stone_properties: Optional[LavaStoneProperties] = None

    @property
    def short_name(self) -> str:
        """Name without the trailing ``Bracelet``."""
        return self.name.replace(" Bracelet", "")

    @property
    def gallery(self) -> List[str]:
        if self.images:
            return list(self.images)
        return [self.image] if self.image else []


def _gallery(folder: str, prefix: str, count: int = 5) -> List[str]:
    return [f"/images/crystals/{folder}/{prefix}{index}.png" for index in range(1, count + 1)]


_LAVA_CHAKRA_STONES = {
    "Root Chakra": ChakraStone(
        stone="Red Jasper",
        color="Red",
        properties=["Grounding", "Stability", "Courage", "Strength"],
        benefits="Provides grounding energy, enhances physical strength, and promotes feelings of safety and security.",
    ),
    "Sacral Chakra": ChakraStone(
        stone="Carnelian",
        color="Orange",
        properties=["Creativity", "Passion", "Confidence", "Vitality"],
        benefits="Stimulates creativity, enhances passion, boosts confidence, and supports reproductive health.",
    ),
    "Solar Plexus Chakra": ChakraStone(
        stone="Yellow Aventurine",
        color="Yellow",
        properties=["Personal Power", "Confidence", "Manifestation", "Willpower"],
        benefits="Enhances personal power, boosts self-confidence, aids in manifestation, and strengthens willpower.",
    ),
    "Heart Chakra": ChakraStone(
        stone="Green Aventurine",
        color="Green",
        properties=["Love", "Compassion", "Emotional Healing", "Heart Opening"],
        benefits="Opens the heart to love, promotes emotional healing, enhances compassion, and attracts prosperity.",
    ),
    "Throat Chakra": ChakraStone(
        stone="Sodalite",
        color="Blue",
        properties=["Communication", "Truth", "Expression", "Clarity"],
        benefits="Enhances communication skills, promotes truthful expression, and brings mental clarity.",
    ),
    "Third Eye Chakra": ChakraStone(
        stone="Amethyst",
        color="Indigo/Purple",
        properties=["Intuition", "Spiritual Awareness", "Psychic Abilities", "Wisdom"],
        benefits="Enhances intuition, promotes spiritual awareness, develops psychic abilities, and brings inner wisdom.",
    ),
    "Crown Chakra": ChakraStone(
        stone="Clear Quartz",
        color="Violet/Clear",
        properties=["Spiritual Connection", "Divine Wisdom", "Enlightenment", "Amplification"],
        benefits="Connects to divine wisdom, promotes spiritual enlightenment, and amplifies the energy of other stones.",
    ),
}


CRYSTAL_CATALOG: List[CatalogCrystal] = [
    CatalogCrystal(
        id="triple-protection-1",
        name="Triple Protection Bracelet - Tiger Eye, Black Obsidian & Hematite",
        description=(
            "A powerful combination of three protective stones. Tiger Eye provides courage and confidence, "
            "Black Obsidian shields against negativity, and Hematite grounds and stabilizes energy."
        ),
        price=35,
        properties=["Protection", "Grounding", "Courage", "Confidence", "Stability"],
        colors=["Golden", "Black", "Metallic Gray"],
        category="Protection",
        chakra="Root",
        zodiac_signs=["Leo", "Capricorn", "Aries"],
        birth_months=[1, 7, 8, 12],
        element="Earth",
        hardness="6-7",
        origin="South Africa, Mexico, Brazil",
        rarity=Rarity.COMMON,
        image="/images/TRIPLE PROTECTION /TP1.png",
    ),
    CatalogCrystal(
        id="blue-aquamarine-1",
        name="Blue Aquamarine Bracelet",
        description=(
            "The stone of courage and communication. Aquamarine enhances clear communication, reduces stress, "
            "and promotes emotional healing and tranquility."
        ),
        price=45,
        properties=["Communication", "Courage", "Tranquility", "Emotional Healing", "Clarity"],
        colors=["Light Blue", "Blue-Green", "Teal"],
        category="Communication",
        chakra="Throat",
        zodiac_signs=["Pisces", "Aries", "Gemini"],
        birth_months=[2, 3, 5],
        element="Water",
        hardness="7.5-8",
        origin="Brazil, Madagascar, Nigeria",
        rarity=Rarity.UNCOMMON,
        image="/images/crystals/AQUAMARINE/AQ1.png",
        images=_gallery("AQUAMARINE", "AQ"),
    ),
    CatalogCrystal(
        id="lava-7-chakra-1",
        name="Lava 7 Chakra Bracelet",
        description=(
            "A powerful grounding stone combined with seven chakra stones. Lava stone provides strength and "
            "courage while the chakra stones balance all energy centers."
        ),
        price=28,
        properties=["Chakra Balancing", "Grounding", "Strength", "Courage", "Energy Balance"],
        colors=["Black", "Red", "Orange", "Yellow", "Green", "Blue", "Indigo", "Violet"],
        category="Chakra Healing",
        chakra="All Chakras",
        zodiac_signs=["Taurus", "Cancer"],
        birth_months=[4, 5, 6, 7],
        element="Fire",
        hardness="5-6",
        origin="Hawaii, Iceland, Italy",
        rarity=Rarity.COMMON,
        image="/images/crystals/7 CHAKRA/LV1.png",
        images=_gallery("7 CHAKRA", "LV"),
        chakra_stones=_LAVA_CHAKRA_STONES,
        lava_stone_properties=LavaStoneProperties(
            origin="Volcanic rock formed from cooled lava",
            properties=["Grounding", "Strength", "Courage", "Stability", "Rebirth"],
            benefits=(
                "Provides grounding energy, enhances emotional strength, promotes courage during difficult times, "
                "and supports personal transformation."
            ),
            aromatherapy="Porous surface can hold essential oils for aromatherapy benefits",
        ),
    ),
    CatalogCrystal(
        id="tiger-eye-1",
        name="Tiger Eye Bracelet",
        description=(
            "A stone of protection and good luck. Tiger Eye enhances focus, willpower, and personal strength "
            "while providing grounding and stability."
        ),
        price=32,
        properties=["Protection", "Focus", "Willpower", "Good Luck", "Grounding"],
        colors=["Golden", "Brown", "Yellow"],
        category="Protection",
        chakra="Solar Plexus",
        zodiac_signs=["Leo", "Capricorn"],
        birth_months=[7, 8, 12, 1],
        element="Earth",
        hardness="7",
        origin="South Africa, Australia",
        rarity=Rarity.COMMON,
        image="/images/crystals/TIGER EYE/TG1.png",
        images=_gallery("TIGER EYE", "TG"),
    ),
    CatalogCrystal(
        id="howlite-1",
        name="Howlite Bracelet",
        description=(
            "A calming stone that reduces stress and anxiety. Howlite promotes peaceful sleep, patience, and "
            "helps quiet an overactive mind."
        ),
        price=25,
        properties=["Calming", "Stress Relief", "Patience", "Sleep", "Peace"],
        colors=["White", "Cream"],
        category="Spiritual Protection",
        chakra="Crown",
        zodiac_signs=["Gemini", "Virgo"],
        birth_months=[5, 6, 8, 9],
        element="Air",
        hardness="3.5",
        origin="Canada, USA",
        rarity=Rarity.COMMON,
        image="/images/crystals/HOWLITE/HW1.png",
        images=_gallery("HOWLITE", "HW"),
    ),
    CatalogCrystal(
        id="rhodochrosite-1",
        name="Rhodochrosite Bracelet",
        description=(
            "The stone of the compassionate heart. Rhodochrosite heals emotional wounds, promotes self-love, "
            "and attracts soulmate love."
        ),
        price=48,
        properties=["Self-Love", "Emotional Healing", "Compassion", "Heart Healing", "Love"],
        colors=["Pink", "Rose", "Red"],
        category="Love",
        chakra="Heart",
        zodiac_signs=["Leo", "Scorpio"],
        birth_months=[7, 8, 10, 11],
        element="Fire",
        hardness="3.5-4",
        origin="Argentina, Peru, USA",
        rarity=Rarity.RARE,
        image="/images/crystals/RHODOCHROSITE/RW1.png",
        images=_gallery("RHODOCHROSITE", "RW"),
    ),
    CatalogCrystal(
        id="citrine-1",
        name="Citrine Bracelet",
        description=(
            "The merchant stone of abundance and prosperity. Citrine attracts wealth, success, and positive "
            "energy while boosting confidence and creativity."
        ),
        price=38,
        properties=["Abundance", "Prosperity", "Success", "Confidence", "Creativity"],
        colors=["Yellow", "Golden", "Orange"],
        category="Abundance",
        chakra="Solar Plexus",
        zodiac_signs=["Gemini", "Aries", "Leo", "Libra"],
        birth_months=[3, 4, 5, 7, 8, 9, 10],
        element="Fire",
        hardness="7",
        origin="Brazil, Madagascar, Russia",
        rarity=Rarity.COMMON,
        image="/images/crystals/CITRINE/CI1.png",
        images=_gallery("CITRINE", "CI", 4),
    ),
    CatalogCrystal(
        id="tree-agate-1",
        name="Tree Agate Bracelet",
        description=(
            "A stone of inner peace and connection to nature. Tree Agate promotes growth, abundance, and helps "
            "you feel centered and grounded."
        ),
        price=30,
        properties=["Inner Peace", "Growth", "Abundance", "Grounding", "Nature Connection"],
        colors=["White", "Green"],
        category="Abundance",
        chakra="Heart",
        zodiac_signs=["Gemini", "Virgo"],
        birth_months=[5, 6, 8, 9],
        element="Earth",
        hardness="6.5-7",
        origin="India, Brazil, USA",
        rarity=Rarity.COMMON,
        image="/images/crystals/TREE AGATE/TG1.png",
        images=_gallery("TREE AGATE", "TG"),
    ),
    CatalogCrystal(
        id="rose-amethyst-clear-quartz-1",
        name="Rose Amethyst Clear Quartz Bracelet",
        description=(
            "A harmonious blend of love, spirituality, and clarity. This combination promotes emotional healing, "
            "spiritual growth, and mental clarity."
        ),
        price=42,
        properties=["Love", "Spiritual Growth", "Clarity", "Emotional Healing", "Amplification"],
        colors=["Pink", "Purple", "Clear"],
        category="Love",
        chakra="Heart",
        zodiac_signs=["Taurus", "Cancer", "Pisces"],
        birth_months=[2, 4, 5, 6, 7],
        element="Water",
        hardness="7",
        origin="Brazil, Madagascar, USA",
        rarity=Rarity.UNCOMMON,
        image="/images/ROSE AMETHYST CLEAR/RA1.png",
    ),
    CatalogCrystal(
        id="turquoise-1",
        name="Turquoise Bracelet",
        description=(
            "A sacred stone of protection and healing. Turquoise promotes communication, wisdom, and provides "
            "protection during travel."
        ),
        price=40,
        properties=["Protection", "Communication", "Wisdom", "Healing", "Travel Protection"],
        colors=["Turquoise", "Blue-Green", "Blue"],
        category="Communication",
        chakra="Throat",
        zodiac_signs=["Sagittarius", "Pisces", "Aquarius"],
        birth_months=[11, 12, 1, 2],
        element="Earth",
        hardness="5-6",
        origin="USA, Iran, China",
        rarity=Rarity.UNCOMMON,
        image="/images/crystals/TURQUOISE/TU1.png",
        images=_gallery("TURQUOISE", "TU"),
    ),
    CatalogCrystal(
        id="green-jade-1",
        name="Green Jade Bracelet",
        description=(
            "The stone of luck and prosperity. Green Jade attracts good fortune, promotes harmony, and brings "
            "emotional balance and stability."
        ),
        price=35,
        properties=["Good Luck", "Prosperity", "Harmony", "Emotional Balance", "Stability"],
        colors=["Green", "Light Green", "Dark Green"],
        category="Abundance",
        chakra="Heart",
        zodiac_signs=["Taurus", "Libra", "Aries"],
        birth_months=[3, 4, 5, 9, 10],
        element="Earth",
        hardness="6-7",
        origin="China, Myanmar, Guatemala",
        rarity=Rarity.COMMON,
        image="/images/crystals/GREEN JADE/GJ1.png",
        images=_gallery("GREEN JADE", "GJ"),
    ),
    CatalogCrystal(
        id="green-aquamarine-1",
        name="Green Aquamarine Bracelet",
        description=(
            "A rare variety of aquamarine that promotes emotional healing, compassion, and connection with "
            "nature. Enhances communication and empathy."
        ),
        price=50,
        properties=["Emotional Healing", "Compassion", "Communication", "Empathy", "Nature Connection"],
        colors=["Light Green", "Blue-Green", "Teal"],
        category="Communication",
        chakra="Heart",
        zodiac_signs=["Pisces", "Gemini", "Virgo"],
        birth_months=[2, 3, 5, 6, 8, 9],
        element="Water",
        hardness="7.5-8",
        origin="Brazil, Madagascar, Pakistan",
        rarity=Rarity.RARE,
        image="/images/crystals/GREEN AQUAMARINE/GW1.png",
        images=_gallery("GREEN AQUAMARINE", "GW"),
    ),
    CatalogCrystal(
        id="moonstone-1",
        name="Moonstone Bracelet",
        description=(
            "The stone of new beginnings and intuition. Moonstone enhances psychic abilities, promotes emotional "
            "balance, and connects you to lunar energy."
        ),
        price=36,
        properties=["Intuition", "New Beginnings", "Emotional Balance", "Psychic Abilities", "Lunar Energy"],
        colors=["White", "Cream", "Peach", "Gray"],
        category="Spiritual Protection",
        chakra="Crown",
        zodiac_signs=["Cancer", "Libra", "Scorpio"],
        birth_months=[6, 7, 9, 10, 11],
        element="Water",
        hardness="6-6.5",
        origin="India, Sri Lanka, Madagascar",
        rarity=Rarity.COMMON,
        image="/images/crystals/MOONSTONE/MO1.png",
        images=_gallery("MOONSTONE", "MO"),
    ),
    CatalogCrystal(
        id="blue-apatite-1",
        name="Blue Apatite Bracelet",
        description=(
            "A stone of manifestation and communication. Blue Apatite enhances psychic abilities, promotes clear "
            "communication, and aids in achieving goals."
        ),
        price=44,
        properties=["Manifestation", "Communication", "Psychic Abilities", "Goal Achievement", "Clarity"],
        colors=["Blue", "Deep Blue", "Light Blue"],
        category="Communication",
        chakra="Throat",
        zodiac_signs=["Gemini", "Pisces"],
        birth_months=[2, 3, 5, 6],
        element="Water",
        hardness="5",
        origin="Madagascar, Brazil, Mexico",
        rarity=Rarity.UNCOMMON,
        image="/images/crystals/BLUE APATITE/BA1.png",
        images=_gallery("BLUE APATITE", "BA"),
    ),
    CatalogCrystal(
        id="rose-quartz-1",
        name="Rose Quartz Bracelet",
        description=(
            "The ultimate stone of unconditional love. Rose Quartz opens the heart chakra, promotes self-love, "
            "and attracts loving relationships."
        ),
        price=32,
        properties=["Love", "Self-Love", "Emotional Healing", "Compassion", "Heart Opening"],
        colors=["Pink", "Rose", "Peach"],
        category="Love",
        chakra="Heart",
        zodiac_signs=["Taurus", "Libra"],
        birth_months=[4, 5, 9, 10],
        element="Earth",
        hardness="7",
        origin="Brazil, Madagascar, India",
        rarity=Rarity.COMMON,
        image="/images/crystals/ROSE/RO1.png",
        images=_gallery("ROSE", "RO"),
    ),
    CatalogCrystal(
        id="lapis-lazuli-1",
        name="Lapis Lazuli Bracelet",
        description=(
            "The stone of truth and wisdom. Lapis Lazuli enhances intellectual ability, stimulates desire for "
            "knowledge, and promotes honest communication."
        ),
        price=46,
        properties=["Truth", "Wisdom", "Communication", "Knowledge", "Intellectual Ability"],
        colors=["Deep Blue", "Blue with Gold"],
        category="Communication",
        chakra="Throat",
        zodiac_signs=["Sagittarius", "Pisces"],
        birth_months=[11, 12, 2, 3],
        element="Water",
        hardness="5-5.5",
        origin="Afghanistan, Chile, Russia",
        rarity=Rarity.UNCOMMON,
        image="/images/crystals/LAPIS LAZULI/LL1.png",
        images=_gallery("LAPIS LAZULI", "LL"),
    ),
    CatalogCrystal(
        id="selenite-1",
        name="Selenite Bracelet",
        description=(
            "A high-vibration stone of purification and spiritual connection. Selenite cleanses energy, promotes "
            "mental clarity, and connects you to higher realms."
        ),
        price=38,
        properties=["Purification", "Mental Clarity", "Spiritual Connection", "Energy Cleansing", "High Vibration"],
        colors=["White", "Clear"],
        category="Spiritual Protection",
        chakra="Crown",
        zodiac_signs=["Taurus", "Cancer"],
        birth_months=[4, 5, 6, 7],
        element="Air",
        hardness="2",
        origin="Morocco, Mexico, USA",
        rarity=Rarity.COMMON,
        image="/images/crystals/SELENITE/SL1.png",
        images=_gallery("SELENITE", "SL"),
    ),
    CatalogCrystal(
        id="magnetic-1",
        name="Magnetic Bracelet",
        description=(
            "A therapeutic bracelet with magnetic properties. Promotes circulation, reduces inflammation, and "
            "provides natural pain relief while balancing energy."
        ),
        price=28,
        properties=["Pain Relief", "Circulation", "Energy Balance", "Healing", "Therapeutic"],
        colors=["Metallic Gray", "Black"],
        category="Healing",
        chakra="Root",
        zodiac_signs=["Virgo", "Capricorn"],
        birth_months=[8, 9, 12, 1],
        element="Earth",
        hardness="5-6",
        origin="China, USA",
        rarity=Rarity.COMMON,
        image="/images/crystals/HEALTH MAGNET BRACELET/HM1.png",
        images=_gallery("HEALTH MAGNET BRACELET", "HM"),
    ),
    CatalogCrystal(
        id="money-magnet-1",
        name="Money Magnet Bracelet",
        description=(
            "A powerful combination of abundance stones designed to attract wealth and prosperity. Features "
            "Citrine, Pyrite, and Green Aventurine for maximum manifestation."
        ),
        price=42,
        properties=["Wealth Attraction", "Prosperity", "Abundance", "Success", "Manifestation"],
        colors=["Golden", "Green", "Yellow"],
        category="Abundance",
        chakra="Solar Plexus",
        zodiac_signs=["Leo", "Aries", "Sagittarius"],
        birth_months=[3, 4, 7, 8, 11, 12],
        element="Fire",
        hardness="6-7",
        origin="Brazil, India, Peru",
        rarity=Rarity.UNCOMMON,
        image="/images/MONEY MAGNET/MM1.png",
    ),
    CatalogCrystal(
        id="amethyst-1",
        name="Amethyst Bracelet",
        description=(
            "A powerful stone of spiritual protection and purification. Amethyst enhances intuition, promotes "
            "clarity of mind, and helps overcome negative patterns."
        ),
        price=34,
        properties=["Spiritual Protection", "Intuition", "Clarity", "Purification", "Calm"],
        colors=["Purple", "Violet", "Deep Purple"],
        category="Spiritual Protection",
        chakra="Third Eye",
        zodiac_signs=["Pisces", "Virgo", "Aquarius", "Capricorn"],
        birth_months=[2, 8, 9, 1, 12],
        element="Air",
        hardness="7",
        origin="Brazil, Uruguay, Zambia",
        rarity=Rarity.COMMON,
        image="/images/crystals/AMETHYST/AM1.png",
        images=_gallery("AMETHYST", "AM"),
    ),
    CatalogCrystal(
        id="dalmatian-jasper-1",
        name="Dalmatian Jasper Bracelet",
        description=(
            "A playful stone that brings joy and positivity. Dalmatian Jasper helps overcome depression, brings "
            "out your inner child, and promotes loyalty and friendship."
        ),
        price=26,
        properties=["Joy", "Positivity", "Friendship", "Loyalty", "Inner Child"],
        colors=["White", "Black", "Cream"],
        category="Emotional Healing",
        chakra="Root",
        zodiac_signs=["Gemini", "Virgo"],
        birth_months=[5, 6, 8, 9],
        element="Earth",
        hardness="6.5-7",
        origin="Mexico, India",
        rarity=Rarity.COMMON,
        image="/images/crystals/DALMATIAN/DM1.png",
        images=_gallery("DALMATIAN", "DM"),
    ),
]

_BY_ID: Dict[str, CatalogCrystal] = {crystal.id: crystal for crystal in CRYSTAL_CATALOG}


def get_crystal(crystal_id: str) -> Optional[CatalogCrystal]:
    """Look up a catalog crystal by id."""
    return _BY_ID.get(crystal_id)
