import uuid
from dataclasses import dataclass, field
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction

from apps.menus.models import Category, Item, Menu
from apps.menus.services import build_menu_slug

User = get_user_model()


@dataclass
class DemoRestaurant:
    email: str
    name: str
    primary_color: str
    bg_color: str
    font: str
    description: str
    # (category name, description, [(item name, description, price, tags), ...])
    categories: list[tuple] = field(default_factory=list)
    languages: list[str] = field(default_factory=list)
    # record name -> (en name, en description, it name, it description)
    translations: dict[str, tuple] = field(default_factory=dict)
    order_config: dict | None = None


DEMOS: list[DemoRestaurant] = [
    DemoRestaurant(
        email="demo-mexican@menucraft.com",
        name="La Casa Bonita",
        primary_color="#C41E3A",
        bg_color="#FFFAF5",
        font="Playfair Display",
        description="Authentic Mexican Cuisine · Family Recipes Since 1998",
        categories=[
            ("Antojitos", "Street food favorites", [
                ("Guacamole & Chips", "Hand-smashed avocado with fresh lime, cilantro, jalapeño & house-made tortilla chips", "11", ["vegan", "gluten-free"]),
                ("Elote", "Grilled Mexican street corn with mayo, cotija cheese, chili powder & lime", "7", ["vegetarian", "gluten-free"]),
                ("Queso Fundido", "Melted Oaxacan cheese with chorizo, roasted poblanos & warm flour tortillas", "13", ["spicy"]),
                ("Ceviche Tostada", "Fresh shrimp & fish cured in lime with mango, red onion, avocado on crispy tostada", "14", ["gluten-free"]),
            ]),
            ("Tacos", "Handmade corn tortillas", [
                ("Al Pastor", "Spit-roasted pork with pineapple, onion, cilantro & salsa verde. Two tacos", "14", ["spicy"]),
                ("Carnitas", "Slow-braised pork shoulder with pickled onion, avocado crema & salsa roja. Two tacos", "14", []),
                ("Baja Fish", "Beer-battered cod with chipotle slaw, lime crema & pico de gallo. Two tacos", "15", []),
                ("Hongos", "Sautéed wild mushrooms, black beans, queso fresco, salsa macha. Two tacos", "13", ["vegetarian"]),
            ]),
            ("Platos Fuertes", "Main courses", [
                ("Mole Poblano", "Chicken thigh in rich chocolate-chili mole with 28 ingredients, served with rice & beans", "22", ["gluten-free"]),
                ("Carne Asada", "12oz grilled skirt steak with chimichurri, charred spring onions, rice & beans", "28", ["gluten-free"]),
                ("Enchiladas Suizas", "Three chicken enchiladas in creamy tomatillo sauce, topped with crema & queso", "18", []),
            ]),
            ("Postres", "Sweet endings", [
                ("Churros", "Crispy cinnamon-sugar churros with chocolate & cajeta dipping sauces", "9", ["vegetarian"]),
                ("Tres Leches", "Three-milk soaked cake with whipped cream & fresh strawberries", "10", ["vegetarian"]),
            ]),
            ("Bebidas", "Drinks & cocktails", [
                ("Margarita Clásica", "Tequila blanco, fresh lime, agave, Cointreau. Salt rim optional", "13", []),
                ("Horchata", "House-made cinnamon rice milk, served ice cold", "5", ["vegan", "gluten-free"]),
                ("Jamaica", "Hibiscus flower iced tea, lightly sweetened", "4", ["vegan", "gluten-free"]),
            ]),
        ],
    ),
    DemoRestaurant(
        email="demo-sushi@menucraft.com",
        name="Sakura Omakase",
        primary_color="#1a1a2e",
        bg_color="#fafafa",
        font="Playfair Display",
        description="Premium Japanese Cuisine · Omakase & Sushi Bar",
        categories=[
            ("Starters", "Light bites to begin", [
                ("Edamame", "Steamed soybeans with Maldon sea salt", "6", ["vegan", "gluten-free"]),
                ("Miso Soup", "Dashi broth with silken tofu, wakame & scallion", "5", ["vegetarian"]),
                ("Tuna Tataki", "Seared bluefin tuna with ponzu, micro greens & crispy garlic chips", "18", ["gluten-free"]),
                ("Gyoza", "Pan-fried pork & shrimp dumplings with yuzu dipping sauce", "12", []),
            ]),
            ("Nigiri", "Two pieces per order · Chef's selection", [
                ("Salmon", "Norwegian king salmon, lightly torched with yuzu zest", "8", ["gluten-free"]),
                ("Toro", "Bluefin tuna belly, the most prized cut. Melt-in-your-mouth", "16", ["gluten-free"]),
                ("Hamachi", "Japanese yellowtail with jalapeño & truffle oil", "10", ["gluten-free"]),
                ("Unagi", "Freshwater eel glazed with house tare sauce", "12", []),
                ("A5 Wagyu", "Torched Japanese A5 wagyu beef with sea salt & wasabi", "22", ["gluten-free"]),
            ]),
            ("Signature Rolls", "Creative maki rolls", [
                ("Dragon Roll", "Shrimp tempura, avocado, unagi, eel sauce & tobiko. 8 pcs", "19", []),
                ("Sakura Roll", "Toro, wagyu, truffle oil, gold leaf. Our signature creation. 6 pcs", "28", []),
                ("Spicy Tuna Crispy Rice", "Hand-cut spicy tuna on crispy sushi rice with sriracha mayo. 4 pcs", "16", ["spicy"]),
                ("Rainbow Roll", "California roll topped with assorted sashimi & avocado. 8 pcs", "22", []),
            ]),
            ("Desserts", "Japanese-inspired sweets", [
                ("Matcha Tiramisu", "Uji matcha cream with mascarpone & ladyfingers", "12", ["vegetarian"]),
                ("Mochi Ice Cream", "Assortment of 3: black sesame, yuzu, strawberry", "9", ["vegetarian", "gluten-free"]),
            ]),
        ],
    ),
    DemoRestaurant(
        email="demo-cafe@menucraft.com",
        name="Morning Light Café",
        primary_color="#5D4037",
        bg_color="#FFF8F0",
        font="Playfair Display",
        description="Specialty Coffee & All-Day Brunch · Locally Sourced",
        categories=[
            ("Coffee & Espresso", "Single-origin beans, roasted locally", [
                ("Espresso", "Double shot of our house blend, notes of chocolate, cherry & caramel", "4", ["vegan"]),
                ("Oat Milk Latte", "Double espresso with steamed Oatly barista. Our most popular drink", "6", ["vegan"]),
                ("Pour Over", "Single-origin, hand-poured. Ask about today's selection", "6", ["vegan", "gluten-free"]),
                ("Matcha Latte", "Ceremonial-grade Uji matcha whisked with your choice of milk", "6.5", ["vegetarian"]),
                ("Cold Brew", "18-hour steep, smooth & rich. Served over ice", "5.5", ["vegan", "gluten-free"]),
            ]),
            ("Brunch", "Served all day", [
                ("Avocado Toast", "Sourdough, smashed avo, everything seasoning, poached eggs, microgreens & chili flakes", "14", ["vegetarian"]),
                ("Açaí Bowl", "Organic açaí blended with banana, topped with granola, berries, coconut & honey", "15", ["vegetarian", "gluten-free"]),
                ("Eggs Benedict", "Poached eggs, Canadian bacon, hollandaise on English muffin with roasted potatoes", "16", []),
                ("Buttermilk Pancakes", "Fluffy stack of 3 with maple syrup, whipped butter & fresh berries", "14", ["vegetarian"]),
                ("Smoked Salmon Bagel", "House-cured salmon, cream cheese, capers, red onion, dill on everything bagel", "16", []),
            ]),
            ("Pastries", "Baked fresh daily", [
                ("Croissant", "Classic French butter croissant, 48-hour laminated dough", "4.5", ["vegetarian"]),
                ("Banana Bread", "House-made with walnuts & chocolate chips. Served warm", "5", ["vegetarian"]),
                ("Cinnamon Roll", "Sticky, gooey, ridiculous. Cream cheese glaze", "6", ["vegetarian"]),
            ]),
            ("Fresh Juice", "Cold-pressed daily", [
                ("Green Machine", "Kale, apple, ginger, lemon, cucumber", "8", ["vegan", "gluten-free"]),
                ("Orange Sunrise", "Orange, carrot, turmeric, ginger", "8", ["vegan", "gluten-free"]),
            ]),
        ],
    ),
    DemoRestaurant(
        email="demo-italian@menucraft.com",
        name="Bella Cucina",
        primary_color="#8B2500",
        bg_color="#FFFBF7",
        font="Playfair Display",
        description="Authentic Italian Cuisine · Est. 2019",
        categories=[
            ("Antipasti", "Traditional Italian starters to begin your meal", [
                ("Bruschetta al Pomodoro", "Crispy ciabatta crowned with vine-ripened San Marzano tomatoes, fresh basil, garlic, and a drizzle of Tuscan extra virgin olive oil", "12", ["vegetarian", "vegan"]),
                ("Burrata e Prosciutto", "Creamy burrata cheese from Puglia draped with aged prosciutto di Parma, arugula, roasted figs, and aged balsamic reduction", "18", []),
                ("Carpaccio di Manzo", "Paper-thin slices of prime beef tenderloin with wild arugula, shaved Parmigiano Reggiano, capers, and truffle oil", "16", ["gluten-free"]),
                ("Calamari Fritti", "Lightly golden-fried tender calamari rings served with zesty marinara and lemon aioli", "14", []),
            ]),
            ("Primi", "First courses: pasta, risotto & soup", [
                ("Cacio e Pepe", "Rome's legendary pasta: hand-rolled tonnarelli tossed with aged Pecorino Romano and freshly cracked Tellicherry black pepper", "19", ["vegetarian"]),
                ("Pappardelle al Ragù", "Wide ribbons of fresh egg pappardelle slow-braised for 6 hours in a rich Bolognese ragù of veal, pork, and San Marzano tomatoes", "24", []),
                ("Risotto ai Funghi Porcini", "Creamy Carnaroli rice slow-stirred with wild porcini mushrooms, aged Parmigiano, white wine, and a whisper of truffle oil", "22", ["vegetarian", "gluten-free"]),
                ("Linguine alle Vongole", "Al dente linguine with fresh littleneck clams, white wine, garlic, chili flakes, and Italian parsley", "23", []),
            ]),
            ("Secondi", "Main courses: meat, fish & poultry", [
                ("Branzino alla Griglia", "Whole Mediterranean sea bass grilled over charcoal, finished with Salmoriglio sauce, capers, and roasted lemon", "34", ["gluten-free"]),
                ("Osso Buco alla Milanese", "Slow-braised veal shank in a rich tomato and vegetable sauce, served with saffron risotto and classic gremolata", "38", ["gluten-free"]),
                ("Pollo alla Parmigiana", "Golden-crusted free-range chicken breast layered with San Marzano tomato sauce, melted mozzarella di bufala, and fresh basil", "26", []),
                ("Tagliata di Manzo", "Sliced 28-day dry-aged ribeye over a bed of peppery arugula with cherry tomatoes, shaved Parmigiano, and aged balsamic", "36", ["gluten-free"]),
            ]),
            ("Dolci", "Sweet endings to a perfect meal", [
                ("Tiramisù della Casa", "Our signature recipe: layers of espresso-soaked Savoiardi, velvety mascarpone cream, and a dusting of Valrhona cocoa", "13", ["vegetarian"]),
                ("Panna Cotta ai Frutti di Bosco", "Silky vanilla bean panna cotta with a jewel-toned mixed berry compote and fresh mint", "11", ["vegetarian", "gluten-free"]),
                ("Cannoli Siciliani", "Crispy handmade cannoli shells filled with sweet ricotta, candied orange peel, and dark chocolate chips", "10", ["vegetarian"]),
                ("Affogato al Caffè", "A scoop of creamy vanilla gelato \"drowned\" in a shot of hot espresso, finished with amaretti crumble", "9", ["vegetarian", "gluten-free"]),
            ]),
            ("Beverages", "Wines, cocktails & soft drinks", [
                ("Negroni Classico", "The quintessential Italian aperitivo: gin, Campari, and sweet vermouth, stirred over a large ice cube with an orange twist", "15", ["vegan"]),
                ("Aperol Spritz", "A refreshing Venetian classic of Aperol, Prosecco, and a splash of soda water, garnished with a fresh orange slice", "14", ["vegan"]),
                ("Limonata della Casa", "House-made Amalfi lemon lemonade with sparkling water, fresh mint, and a touch of honey", "6", ["vegan", "gluten-free"]),
                ("Espresso Doppio", "Double shot of our signature Italian roast espresso, rich and bold", "4.5", ["vegan", "gluten-free"]),
            ]),
        ],
        languages=["en", "it"],
        translations={
            "Antipasti": ("Appetizers", "Traditional Italian starters to begin your meal", "Antipasti", "Antipasti tradizionali italiani per iniziare il pasto"),
            "Primi": ("First Courses", "Handmade pasta and risotto", "Primi Piatti", "Pasta fatta a mano e risotti"),
            "Secondi": ("Main Courses", "Premium meats and seafood", "Secondi Piatti", "Carni pregiate e frutti di mare"),
            "Dolci": ("Desserts", "Sweet Italian endings", "Dolci", "Dolci finali italiani"),
            "Beverages": ("Beverages", "Cocktails, coffee & refreshments", "Bevande", "Cocktail, caffè e bevande"),
            "Bruschetta al Pomodoro": ("Tomato Bruschetta", "Crispy ciabatta topped with vine-ripened San Marzano tomatoes, fresh basil, garlic, and Tuscan olive oil", "Bruschetta al Pomodoro", "Ciabatta croccante con pomodori San Marzano maturi, basilico fresco, aglio e un filo di olio extravergine toscano"),
            "Burrata e Prosciutto": ("Burrata & Prosciutto", "Creamy burrata from Puglia with aged Parma prosciutto, arugula, roasted figs, and balsamic reduction", "Burrata e Prosciutto", "Cremosa burrata pugliese con prosciutto di Parma stagionato, rucola, fichi arrostiti e riduzione di aceto balsamico"),
            "Carpaccio di Manzo": ("Beef Carpaccio", "Paper-thin prime beef tenderloin with wild arugula, shaved Parmigiano Reggiano, capers, and truffle oil", "Carpaccio di Manzo", "Fettine sottilissime di filetto di manzo con rucola selvatica, scaglie di Parmigiano Reggiano, capperi e olio al tartufo"),
            "Calamari Fritti": ("Fried Calamari", "Lightly golden-fried tender calamari rings with zesty marinara and lemon aioli", "Calamari Fritti", "Anelli di calamaro teneri fritti dorati con marinara piccante e aioli al limone"),
            "Cacio e Pepe": ("Cacio e Pepe", "Roman-style tonnarelli with Pecorino Romano cream and cracked black pepper", "Cacio e Pepe", "Tonnarelli alla romana con crema di Pecorino Romano e pepe nero macinato"),
            "Pappardelle al Ragù": ("Pappardelle with Ragù", "Wide ribbon pasta with slow-braised Tuscan beef and pork ragù", "Pappardelle al Ragù", "Pappardelle con ragù toscano di manzo e maiale brasato lentamente"),
            "Risotto ai Funghi Porcini": ("Porcini Mushroom Risotto", "Creamy arborio rice with wild porcini mushrooms, white wine, and Parmigiano", "Risotto ai Funghi Porcini", "Riso arborio cremoso con funghi porcini selvatici, vino bianco e Parmigiano"),
            "Linguine alle Vongole": ("Linguine with Clams", "Linguine with fresh Manila clams, white wine, garlic, and parsley", "Linguine alle Vongole", "Linguine con vongole veraci, vino bianco, aglio e prezzemolo"),
            "Branzino alla Griglia": ("Grilled Sea Bass", "Whole Mediterranean sea bass grilled with herbs, lemon, and olive oil", "Branzino alla Griglia", "Branzino mediterraneo alla griglia con erbe aromatiche, limone e olio d'oliva"),
            "Osso Buco alla Milanese": ("Osso Buco Milanese", "Slow-braised veal shank with saffron risotto and gremolata", "Osso Buco alla Milanese", "Stinco di vitello brasato con risotto allo zafferano e gremolata"),
            "Pollo alla Parmigiana": ("Chicken Parmigiana", "Breaded chicken cutlet with San Marzano tomato sauce and melted mozzarella", "Pollo alla Parmigiana", "Cotoletta di pollo impanata con salsa di pomodoro San Marzano e mozzarella fusa"),
            "Tagliata di Manzo": ("Sliced Beef Steak", "Grilled prime ribeye sliced over arugula with cherry tomatoes and aged balsamic", "Tagliata di Manzo", "Ribeye alla griglia tagliato su rucola con pomodorini e aceto balsamico invecchiato"),
            "Tiramisù della Casa": ("House Tiramisù", "Classic layered espresso-soaked ladyfingers with mascarpone cream", "Tiramisù della Casa", "Classici savoiardi inzuppati al caffè con crema al mascarpone"),
            "Panna Cotta ai Frutti di Bosco": ("Berry Panna Cotta", "Silky vanilla panna cotta with mixed berry coulis", "Panna Cotta ai Frutti di Bosco", "Panna cotta alla vaniglia con coulis di frutti di bosco"),
            "Cannoli Siciliani": ("Sicilian Cannoli", "Crispy shells filled with sweet ricotta, chocolate chips, and pistachios", "Cannoli Siciliani", "Cialde croccanti ripiene di ricotta dolce, gocce di cioccolato e pistacchi"),
            "Affogato al Caffè": ("Espresso Affogato", "Vanilla gelato drowned in a shot of hot espresso", "Affogato al Caffè", "Gelato alla vaniglia annegato in un doppio espresso caldo"),
            "Negroni Classico": ("Classic Negroni", "Gin, Campari, and sweet vermouth, stirred and served over ice with orange peel", "Negroni Classico", "Gin, Campari e vermouth dolce, mescolato e servito con ghiaccio e scorza d'arancia"),
            "Aperol Spritz": ("Aperol Spritz", "Aperol, prosecco, and a splash of soda, the iconic Italian aperitivo", "Aperol Spritz", "Aperol, prosecco e un goccio di soda, l'iconico aperitivo italiano"),
            "Limonata della Casa": ("House Lemonade", "Fresh-squeezed Amalfi lemon juice with sparkling water and mint", "Limonata della Casa", "Succo di limone di Amalfi spremuto fresco con acqua frizzante e menta"),
            "Espresso Doppio": ("Double Espresso", "Rich double shot of our custom Italian roast blend", "Espresso Doppio", "Doppio espresso della nostra miscela italiana artigianale"),
        },
        order_config={"enabled": True, "type": "phone", "value": "+1-555-BELLA-01"},
    ),
]


class Command(BaseCommand):
    help = "Creates the demo restaurants (pro plan) with their full menus."

    def add_arguments(self, parser):
        parser.add_argument("--password", default="demo123", help="Password set on every demo account")
        parser.add_argument(
            "--reset",
            action="store_true",
            help="Delete existing demo accounts (and their menus) before seeding",
        )

    def handle(self, *args, **options):
        password = options["password"]
        for demo in DEMOS:
            existing = User.objects.filter(email__iexact=demo.email).first()
            if existing and not options["reset"]:
                self.stdout.write(self.style.WARNING(f"Skip: {demo.email} already exists"))
                continue
            with transaction.atomic():
                if existing:
                    existing.delete()
                menu = self._create_demo(demo, password)
            self.stdout.write(self.style.SUCCESS(f"{demo.name}: /m/{menu.slug}"))

    def _create_demo(self, demo: DemoRestaurant, password: str) -> Menu:
        user = User.objects.create_user(
            username=f"u_{uuid.uuid4().hex[:12]}",
            email=demo.email,
            password=password,
            restaurant_name=demo.name,
            plan=User.PLAN_PRO,
        )
        menu = Menu.objects.create(
            owner=user,
            name="Main Menu",
            slug=build_menu_slug(demo.name),
            description=demo.description,
            primary_color=demo.primary_color,
            bg_color=demo.bg_color,
            font=demo.font,
        )
        record_ids = {}
        for cat_index, (cat_name, cat_desc, items) in enumerate(demo.categories):
            category = Category.objects.create(menu=menu, name=cat_name, description=cat_desc, sort_order=cat_index)
            record_ids[cat_name] = category.id
            created = Item.objects.bulk_create(
                [
                    Item(
                        category=category,
                        name=name,
                        description=desc,
                        price=Decimal(price),
                        tags=list(tags),
                        is_featured=item_index == 0,
                        sort_order=item_index,
                    )
                    for item_index, (name, desc, price, tags) in enumerate(items)
                ]
            )
            record_ids.update((item.name, item.id) for item in created)
        if demo.languages:
            menu.languages = list(demo.languages)
            menu.translations = self._translations(demo, record_ids)
        if demo.order_config:
            menu.order_config = dict(demo.order_config)
        menu.save()
        return menu

    def _translations(self, demo: DemoRestaurant, record_ids: dict) -> dict:
        """lang -> {record id -> {name, description}}, keyed by the ids just created."""
        per_lang = {"en": {}, "it": {}}
        for record_name, (en_name, en_desc, it_name, it_desc) in demo.translations.items():
            record_id = record_ids.get(record_name)
            if record_id is None:
                continue
            per_lang["en"][str(record_id)] = {"name": en_name, "description": en_desc}
            per_lang["it"][str(record_id)] = {"name": it_name, "description": it_desc}
        return per_lang
