"""
Fallback catalog: canned results used when the analysis service can't be reached.

The catalog is a fixed, ordered list; which entry is served is decided by a
selector function `(n) -> index`. The default selector is random.randrange;
pass `lambda n: 0` (or similar) for deterministic behavior.
"""
import random
from typing import Callable
from ecoscan.orchestrator.contracts import EnvironmentalImpact, ScanResult, new_id, now_iso

Selector = Callable[[int], int]

# Each entry is the service-owned subset of a ScanResult (no id / image / timestamp)
EXAMPLES: tuple[dict, ...] = (
    {
        "objectName": "Plastic Water Bottle",
        "classification": "recyclable",
        "confidence": 94,
        "materials": ["PET Plastic", "Polypropylene Cap"],
        "environmentalImpact": {"carbonFootprint": "Medium", "recyclability": "High", "biodegradability": "Low"},
        "disposalTips": [
            "Remove cap and label before recycling",
            "Rinse bottle to remove residue",
            "Check local recycling guidelines",
        ],
        "reuseSuggestions": [
            "Plant pot for seedlings",
            "Storage container for small items",
            "DIY bird feeder",
        ],
        "educationalFacts": [
            "PET bottles can be recycled into clothing fibers",
            "One bottle takes 450 years to decompose naturally",
            "Recycling one bottle saves energy equivalent to powering a 60W bulb for 6 hours",
        ],
    },
    {
        "objectName": "Glass Jar",
        "classification": "reusable",
        "confidence": 98,
        "materials": ["Soda-lime Glass", "Metal Lid"],
        "environmentalImpact": {"carbonFootprint": "Low", "recyclability": "Very High", "biodegradability": "Never"},
        "disposalTips": [
            "Remove labels and adhesive",
            "Separate metal lid for recycling",
            "Clean thoroughly before disposal",
        ],
        "reuseSuggestions": [
            "Food storage container",
            "Candle holder",
            "Organize small items like screws or buttons",
        ],
        "educationalFacts": [
            "Glass can be recycled infinitely without quality loss",
            "Recycled glass uses 40% less energy than new glass",
            "Glass containers preserve food quality better than plastic",
        ],
    },
    {
        "objectName": "Aluminum Can",
        "classification": "recyclable",
        "confidence": 96,
        "materials": ["Aluminum", "Polymer Lining"],
        "environmentalImpact": {"carbonFootprint": "Medium", "recyclability": "Very High", "biodegradability": "Very Low"},
        "disposalTips": [
            "Empty and rinse the can",
            "Do not crush if your facility sorts by shape",
            "Place in the metals recycling stream",
        ],
        "reuseSuggestions": [
            "Pencil or brush holder",
            "Small herb planter",
            "Lantern with punched patterns",
        ],
        "educationalFacts": [
            "Aluminum can be recycled indefinitely",
            "A recycled can can be back on the shelf in about 60 days",
            "Recycling aluminum saves around 95% of the energy used to make new metal",
        ],
    },
    {
        "objectName": "Cardboard Box",
        "classification": "recyclable",
        "confidence": 91,
        "materials": ["Corrugated Cardboard", "Packing Tape"],
        "environmentalImpact": {"carbonFootprint": "Low", "recyclability": "High", "biodegradability": "High"},
        "disposalTips": [
            "Flatten the box to save space",
            "Remove tape and plastic inserts",
            "Keep it dry; wet or greasy cardboard is not recyclable",
        ],
        "reuseSuggestions": [
            "Storage for seasonal items",
            "Sheet mulch for garden beds",
            "Shipping box for the next parcel",
        ],
        "educationalFacts": [
            "Cardboard fibers can be recycled 5 to 7 times",
            "Recycling a ton of cardboard saves about 17 trees",
            "Corrugated cardboard is among the most recycled packaging materials",
        ],
    },
    {
        "objectName": "Potato Chip Bag",
        "classification": "non-recyclable",
        "confidence": 88,
        "materials": ["Metallized Polypropylene", "Multi-layer Laminate"],
        "environmentalImpact": {"carbonFootprint": "Medium", "recyclability": "Very Low", "biodegradability": "Never"},
        "disposalTips": [
            "Place in general waste unless a film take-back program exists",
            "Look for specialty flexible-packaging recycling schemes",
            "Do not put in curbside recycling",
        ],
        "reuseSuggestions": [
            "Line a small trash bin",
            "Insulating wrap for craft projects",
        ],
        "educationalFacts": [
            "Multi-layer bags bond plastic and aluminum, which makes separation impractical",
            "Flexible packaging is a growing share of landfill plastic",
            "Buying snacks in bulk cuts down on laminated packaging",
        ],
    },
)


def random_selector(n: int) -> int:
    return random.randrange(n)


class FallbackCatalog:
    def __init__(self, examples=EXAMPLES, selector: Selector = random_selector):
        if not examples:
            raise ValueError("fallback catalog needs at least one example")
        self.examples = tuple(examples)
        self.selector = selector

    def pick(self) -> dict:
        idx = self.selector(len(self.examples)) % len(self.examples)
        return self.examples[idx]

    def synthesize(self, image: str) -> ScanResult:
        ex = self.pick()
        return ScanResult(
            id=new_id(),
            image=image,
            object_name=ex["objectName"],
            classification=ex["classification"],
            confidence=ex["confidence"],
            materials=tuple(ex["materials"]),
            environmental_impact=EnvironmentalImpact.from_dict(ex["environmentalImpact"]),
            disposal_tips=tuple(ex["disposalTips"]),
            reuse_suggestions=tuple(ex["reuseSuggestions"]),
            educational_facts=tuple(ex["educationalFacts"]),
            timestamp=now_iso(),
        )
