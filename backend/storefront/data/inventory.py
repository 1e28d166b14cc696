"""
Bundled starter catalog

Loaded by GET /api/products/seed and scripts/setup_db.py when the
products table is empty. Prices are USD text; scripts/convert_prices.py
rewrites them to INR.
"""

INVENTORY = [
    {
        "name": "Timber Lounge Chair",
        "description": "Solid oak frame with a woven seat, built for long afternoons.",
        "price": "1000",
        "image": "/products/chair1.png",
        "categories": ["new arrivals", "chairs"],
        "brand": "Northwood",
        "current_inventory": 4,
    },
    {
        "name": "Linen Two-Seater Sofa",
        "description": "Compact sofa in washed linen with feather-blend cushions.",
        "price": "1200",
        "image": "/products/sofa1.png",
        "categories": ["new arrivals", "sofas"],
        "brand": "Hearth & Co",
        "current_inventory": 2,
    },
    {
        "name": "Wire Accent Chair",
        "description": "Powder-coated steel wire chair for indoor or covered outdoor use.",
        "price": "800",
        "image": "/products/chair2.png",
        "categories": ["chairs"],
        "brand": "Northwood",
        "current_inventory": 10,
    },
    {
        "name": "Velvet Reading Chair",
        "description": "Deep seat, high back, and a velvet finish in forest green.",
        "price": "900",
        "image": "/products/chair3.png",
        "categories": ["chairs"],
        "brand": "Hearth & Co",
        "current_inventory": 6,
    },
    {
        "name": "Modular Corner Sofa",
        "description": "Three-piece modular sofa that reconfigures as an L or a straight run.",
        "price": "2000",
        "image": "/products/sofa2.png",
        "categories": ["sofas"],
        "brand": "Atelier Nord",
        "current_inventory": 3,
    },
    {
        "name": "Leather Club Sofa",
        "description": "Aniline leather with rolled arms on a kiln-dried hardwood frame.",
        "price": "1600",
        "image": "/products/sofa3.png",
        "categories": ["sofas"],
        "brand": "Atelier Nord",
        "current_inventory": 1,
    },
    {
        "name": "Ceramic Table Lamp",
        "description": "Hand-glazed stoneware base with a pleated cotton shade.",
        "price": "300",
        "image": "/products/lamp1.png",
        "categories": ["new arrivals", "lighting"],
        "brand": "Kiln Studio",
        "current_inventory": 15,
    },
    {
        "name": "Brass Floor Lamp",
        "description": "Adjustable arm floor lamp in brushed brass.",
        "price": "550",
        "image": "/products/lamp2.png",
        "categories": ["lighting"],
        "brand": "Kiln Studio",
        "current_inventory": 8,
    },
    {
        "name": "Walnut Side Table",
        "description": "Round side table in oiled walnut with a lower shelf.",
        "price": "500",
        "image": "/products/table1.png",
        "categories": ["tables"],
        "brand": "Northwood",
        "current_inventory": 12,
    },
    {
        "name": "Marble Coffee Table",
        "description": "Honed Carrara top on a blackened steel base.",
        "price": "1100",
        "image": "/products/table2.png",
        "categories": ["tables", "new arrivals"],
        "brand": "Atelier Nord",
        "current_inventory": 5,
    },
]
