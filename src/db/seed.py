# static catalog used when the app starts, stands in for a product feed

from db.models import Product

SEED_PRODUCTS = (
    Product(
        id="p001",
        name="Silk Wrap Midi Dress",
        price=189.0,
        original_price=240.0,
        image="images/silk-wrap-midi.jpg",
        category="Dresses",
        sizes=("XS", "S", "M", "L"),
        colors=("Burgundy", "Navy", "Black"),
        description="Bias-cut silk wrap dress with a tie waist.",
        rating=4.8,
        reviews=124,
    ),
    Product(
        id="p002",
        name="Linen Shirt Dress",
        price=95.0,
        image="images/linen-shirt-dress.jpg",
        category="Dresses",
        sizes=("S", "M", "L", "XL"),
        colors=("White", "Cream", "Blue"),
        description="Relaxed linen shirt dress with rolled sleeves.",
        rating=4.4,
        reviews=86,
    ),
    Product(
        id="p003",
        name="Ribbed Knit Top",
        price=38.0,
        image="images/ribbed-knit-top.jpg",
        category="Tops",
        sizes=("XS", "S", "M"),
        colors=("Black", "Gray", "Pink"),
        description="Fitted ribbed top in a soft cotton blend.",
        rating=4.2,
        reviews=211,
    ),
    Product(
        id="p004",
        name="High-Rise Wide Leg Trousers",
        price=120.0,
        original_price=150.0,
        image="images/wide-leg-trousers.jpg",
        category="Bottoms",
        sizes=("S", "M", "L", "XL", "XXL"),
        colors=("Black", "Cream"),
        description="Pleated wide leg trousers with a high waist.",
        rating=4.6,
        reviews=57,
    ),
    Product(
        id="p005",
        name="Wool Blend Coat",
        price=320.0,
        image="images/wool-coat.jpg",
        category="Outerwear",
        sizes=("S", "M", "L"),
        colors=("Camel", "Black", "Gray"),
        description="Double-breasted coat in a warm wool blend.",
        rating=4.9,
        reviews=42,
    ),
    Product(
        id="p006",
        name="Leather Ankle Boots",
        price=210.0,
        image="images/ankle-boots.jpg",
        category="Shoes",
        sizes=("36", "37", "38", "39", "40", "41"),
        colors=("Black", "Brown"),
        description="Block heel ankle boots in smooth leather.",
        in_stock=False,
        rating=4.5,
        reviews=98,
    ),
    Product(
        id="p007",
        name="Pleated Maxi Skirt",
        price=78.0,
        image="images/pleated-maxi-skirt.jpg",
        category="Bottoms",
        sizes=("XS", "S", "M", "L"),
        colors=("Navy", "Burgundy"),
        description="Flowing pleated skirt with an elastic waist.",
        rating=4.1,
        reviews=33,
    ),
    Product(
        id="p008",
        name="Gold Hoop Earrings",
        price=45.0,
        image="images/gold-hoops.jpg",
        category="Accessories",
        sizes=("One Size",),
        colors=("Gold",),
        description="Lightweight gold-plated hoops.",
        rating=4.7,
        reviews=310,
    ),
    Product(
        id="p009",
        name="Satin Slip Dress",
        price=135.0,
        original_price=165.0,
        image="images/satin-slip.jpg",
        category="Dresses",
        sizes=("XS", "S", "M", "L"),
        colors=("Black", "Pink", "Cream"),
        description="Bias-cut satin slip dress with adjustable straps.",
        rating=4.6,
        reviews=145,
    ),
)
