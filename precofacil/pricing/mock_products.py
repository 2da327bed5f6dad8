from __future__ import annotations

import random

from ..places.models import Category, Place, Product

MIN_PRODUCTS = 3
MAX_PRODUCTS = 5
PRICE_VARIATION = (0.85, 1.25)

# (name, base price in BRL)
PRODUCTS_BY_CATEGORY: dict[Category, list[tuple[str, float]]] = {
    Category.mercado: [
        ("Arroz Tipo 1 5kg", 24.90),
        ("Feijão Carioca 1kg", 8.50),
        ("Óleo de Soja 900ml", 7.90),
        ("Açúcar Cristal 1kg", 4.90),
        ("Café Torrado 500g", 14.90),
        ("Leite Integral 1L", 5.50),
        ("Macarrão Espaguete 500g", 3.90),
        ("Farinha de Trigo 1kg", 5.50),
        ("Sal Refinado 1kg", 2.50),
        ("Molho de Tomate 340g", 3.20),
    ],
    Category.farmacia: [
        ("Dipirona Sódica 500mg", 9.90),
        ("Vitamina C 1g", 18.50),
        ("Protetor Solar FPS 50", 48.90),
        ("Paracetamol 750mg", 11.50),
        ("Álcool Gel 70% 500ml", 14.90),
        ("Ibuprofeno 600mg", 15.90),
        ("Esmalte Colorido", 7.90),
        ("Shampoo Anticaspa 400ml", 22.90),
        ("Fralda Descartável M", 42.90),
        ("Termômetro Digital", 28.90),
    ],
    Category.lanchonete: [
        ("X-Burger Artesanal", 22.90),
        ("Refrigerante Lata 350ml", 6.50),
        ("Batata Frita Grande", 15.90),
        ("Hot Dog Completo", 12.50),
        ("Suco Natural 500ml", 10.90),
        ("X-Salada", 18.90),
        ("Milk Shake", 14.90),
        ("Porção de Onion Rings", 16.90),
        ("Sanduíche Natural", 11.90),
        ("Açaí 500ml", 18.90),
    ],
    Category.cafeteria: [
        ("Café Expresso", 7.50),
        ("Cappuccino Tradicional", 11.90),
        ("Pão de Queijo", 5.50),
        ("Croissant Recheado", 9.90),
        ("Bolo Caseiro Fatia", 10.50),
        ("Café com Leite", 8.90),
        ("Brownie", 12.90),
        ("Torta de Limão", 14.90),
        ("Cookie Chocolate", 6.90),
        ("Chá Gelado 500ml", 9.90),
    ],
    Category.padaria: [
        ("Pão Francês (kg)", 14.90),
        ("Pão de Forma Integral", 9.50),
        ("Bolo de Chocolate", 28.90),
        ("Sonho Recheado", 6.50),
        ("Empada de Frango", 7.90),
        ("Pão de Queijo", 4.90),
        ("Torta Salgada", 32.90),
        ("Biscoito Caseiro (kg)", 24.90),
        ("Croissant", 8.90),
        ("Baguete", 6.90),
    ],
}


def products_for(category: Category) -> list[tuple[str, float]]:
    return PRODUCTS_BY_CATEGORY.get(category, PRODUCTS_BY_CATEGORY[Category.mercado])


def generate_mock_products(place: Place, rng: random.Random | None = None) -> list[Product]:
    """
    Pick 3-5 random products from the place's category table with jittered prices.

    Each price is ``round(base * r, 2)`` with ``r`` uniform in [0.85, 1.25].
    Pass a seeded ``random.Random`` for reproducible output.
    """
    rng = rng or random.Random()
    count = rng.randint(MIN_PRODUCTS, MAX_PRODUCTS)
    shuffled = list(products_for(place.category))
    rng.shuffle(shuffled)

    products: list[Product] = []
    for index, (name, base_price) in enumerate(shuffled[:count]):
        variation = rng.uniform(*PRICE_VARIATION)
        products.append(Product(
            id=f"{place.id}-{index}",
            name=name,
            price=round(base_price * variation, 2),
            store=place.name,
            distance=f"{place.distance} km",
            category=place.category,
            is_real=False,
        ))
    return products
