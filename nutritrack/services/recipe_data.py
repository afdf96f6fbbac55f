"""Built-in recipe table used when the AI recommender is unavailable."""

from typing import List, Tuple

from nutritrack.models.recipe import Ingredient, Instruction, NutritionFacts, Recipe


def _recipe(
    recipe_id: str,
    title: str,
    summary: str,
    minutes: int,
    nutrition: Tuple[float, float, float, float, float],
    ingredients: List[Tuple[str, float, str, str]],
    steps: List[str],
    diets: List[str],
    dish_types: List[str],
    cuisines: List[str],
    difficulty: str,
    tags: List[str],
) -> Recipe:
    calories, protein, carbs, fat, fiber = nutrition
    return Recipe(
        id=recipe_id,
        title=title,
        summary=summary,
        ready_in_minutes=minutes,
        servings=1,
        nutrition=NutritionFacts(calories=calories, protein=protein, carbs=carbs, fat=fat, fiber=fiber),
        ingredients=[
            Ingredient(name=name, amount=amount, unit=unit, aisle=aisle, original=f"{amount:g} {unit} {name}")
            for name, amount, unit, aisle in ingredients
        ],
        instructions=[Instruction(number=i, step=step) for i, step in enumerate(steps, start=1)],
        diets=diets,
        dish_types=dish_types,
        cuisines=cuisines,
        difficulty=difficulty,
        tags=tags,
    )


STATIC_RECIPES: List[Recipe] = [
    # Breakfast
    _recipe(
        "1", "Protein-Packed Scrambled Eggs",
        "High-protein breakfast with vegetables for a nutritious start to your day.",
        10, (280, 20, 4, 20, 2),
        [("eggs", 3, "large", "Dairy"), ("spinach", 1, "cup", "Produce"), ("olive oil", 1, "tsp", "Oils")],
        ["Heat oil in a non-stick pan over medium heat",
         "Whisk eggs with salt and pepper in a bowl",
         "Add spinach to pan and cook until wilted",
         "Pour in eggs and gently scramble until set"],
        ["vegetarian", "low-carb", "keto", "gluten-free"], ["breakfast"], ["american"], "easy",
        ["high-protein", "quick", "healthy"],
    ),
    _recipe(
        "2", "Overnight Oats with Berries",
        "Make-ahead breakfast rich in fiber and antioxidants.",
        5, (320, 12, 58, 6, 8),
        [("oats", 0.5, "cup", "Cereal"), ("milk", 0.5, "cup", "Dairy"),
         ("berries", 0.5, "cup", "Produce"), ("honey", 1, "tbsp", "Baking")],
        ["Mix oats, milk, and chia seeds in a jar",
         "Add honey and vanilla extract",
         "Top with berries and refrigerate overnight"],
        ["vegetarian"], ["breakfast"], ["american"], "easy",
        ["make-ahead", "fiber-rich", "antioxidants"],
    ),
    _recipe(
        "3", "Greek Yogurt Parfait",
        "Layers of creamy yogurt, crunchy granola and fresh fruit.",
        5, (350, 22, 45, 9, 5),
        [("greek yogurt", 1, "cup", "Dairy"), ("granola", 0.33, "cup", "Cereal"),
         ("berries", 0.5, "cup", "Produce"), ("honey", 1, "tsp", "Baking")],
        ["Spoon half the yogurt into a glass",
         "Add a layer of granola and berries",
         "Repeat the layers and drizzle with honey"],
        ["vegetarian"], ["breakfast", "snack"], ["mediterranean"], "easy",
        ["high-protein", "no-cook"],
    ),
    _recipe(
        "4", "Veggie Omelette with Toast",
        "Fluffy omelette packed with peppers and onions, served with wholegrain toast.",
        15, (450, 26, 32, 24, 5),
        [("eggs", 2, "large", "Dairy"), ("bell pepper", 0.5, "medium", "Produce"),
         ("onion", 0.25, "medium", "Produce"), ("wholegrain bread", 1, "slice", "Bakery"),
         ("olive oil", 1, "tsp", "Oils")],
        ["Saute pepper and onion in oil until soft",
         "Pour in beaten eggs and cook until nearly set",
         "Fold the omelette and serve with toast"],
        ["vegetarian"], ["breakfast"], ["american"], "easy",
        ["balanced", "quick"],
    ),
    # Lunch
    _recipe(
        "5", "Grilled Chicken Salad Bowl",
        "Lean protein with fresh vegetables for a balanced, satisfying meal.",
        20, (280, 35, 8, 12, 4),
        [("chicken breast", 120, "g", "Meat"), ("mixed greens", 2, "cups", "Produce"),
         ("cherry tomatoes", 0.5, "cup", "Produce"), ("cucumber", 0.5, "cup", "Produce")],
        ["Season chicken breast with herbs and spices",
         "Grill chicken for 6-7 minutes per side",
         "Let chicken rest, then slice",
         "Arrange salad greens and vegetables in bowl",
         "Top with sliced chicken and dressing"],
        ["low-carb", "high-protein", "gluten-free"], ["lunch", "salad"], ["mediterranean"], "medium",
        ["lean-protein", "fresh", "balanced"],
    ),
    _recipe(
        "6", "Turkey Hummus Wrap",
        "Whole wheat wrap filled with turkey, hummus and crunchy vegetables.",
        10, (520, 34, 48, 20, 7),
        [("whole wheat tortilla", 1, "large", "Bakery"), ("turkey breast", 100, "g", "Meat"),
         ("hummus", 3, "tbsp", "Deli"), ("mixed greens", 1, "cup", "Produce"),
         ("cucumber", 0.5, "cup", "Produce")],
        ["Spread hummus over the tortilla",
         "Layer turkey, greens and cucumber",
         "Roll tightly and slice in half"],
        ["high-protein"], ["lunch"], ["american"], "easy",
        ["portable", "quick"],
    ),
    _recipe(
        "7", "Red Lentil Soup",
        "Warming, fiber-rich soup with lentils, carrots and cumin.",
        35, (690, 32, 98, 16, 24),
        [("red lentils", 1, "cup", "Grains"), ("carrot", 2, "medium", "Produce"),
         ("onion", 1, "medium", "Produce"), ("vegetable broth", 3, "cups", "Canned Goods"),
         ("olive oil", 1, "tbsp", "Oils")],
        ["Soften onion and carrot in oil",
         "Add lentils, broth and cumin and simmer 25 minutes",
         "Blend partially and season to taste"],
        ["vegetarian", "vegan", "gluten-free"], ["lunch", "dinner"], ["middle eastern"], "easy",
        ["plant-based", "fiber-rich", "one-pot"],
    ),
    # Dinner
    _recipe(
        "8", "Baked Salmon with Vegetables",
        "Omega-3 rich salmon with roasted vegetables for a complete dinner.",
        25, (420, 32, 28, 22, 6),
        [("salmon fillet", 150, "g", "Seafood"), ("broccoli", 1, "cup", "Produce"),
         ("sweet potato", 1, "medium", "Produce"), ("olive oil", 1, "tbsp", "Oils")],
        ["Preheat oven to 400F (200C)",
         "Place salmon and vegetables on baking sheet",
         "Drizzle with olive oil and seasonings",
         "Bake for 18-20 minutes until salmon flakes easily"],
        ["low-carb", "high-protein", "omega-3", "gluten-free"], ["dinner", "main course"],
        ["mediterranean"], "easy",
        ["omega-3", "one-pan", "nutritious"],
    ),
    _recipe(
        "9", "Quinoa Buddha Bowl",
        "Complete protein quinoa with colorful vegetables and tahini dressing.",
        30, (380, 15, 52, 14, 10),
        [("quinoa", 0.5, "cup", "Grains"), ("chickpeas", 0.5, "cup", "Canned Goods"),
         ("bell pepper", 1, "medium", "Produce"), ("tahini", 2, "tbsp", "Condiments")],
        ["Cook quinoa according to package directions",
         "Roast vegetables in oven at 400F for 20 minutes",
         "Prepare tahini dressing by mixing all ingredients",
         "Assemble bowl with quinoa, vegetables, and dressing"],
        ["vegetarian", "vegan", "gluten-free"], ["lunch", "dinner"], ["mediterranean", "middle eastern"],
        "medium",
        ["plant-based", "complete-protein", "fiber-rich"],
    ),
    _recipe(
        "10", "Chicken and Vegetable Stir Fry",
        "Quick stir fry with tender chicken, crisp vegetables and brown rice.",
        25, (650, 45, 70, 18, 6),
        [("chicken breast", 150, "g", "Meat"), ("broccoli", 1, "cup", "Produce"),
         ("bell pepper", 1, "medium", "Produce"), ("brown rice", 0.75, "cup", "Grains"),
         ("soy sauce", 2, "tbsp", "Condiments")],
        ["Cook the rice",
         "Stir fry sliced chicken until golden",
         "Add vegetables and soy sauce and toss until tender-crisp",
         "Serve over rice"],
        ["high-protein"], ["dinner", "main course"], ["asian"], "medium",
        ["quick", "balanced"],
    ),
    _recipe(
        "11", "Chickpea Spinach Curry",
        "Creamy coconut curry with chickpeas and spinach.",
        30, (720, 24, 80, 34, 18),
        [("chickpeas", 1, "cup", "Canned Goods"), ("spinach", 2, "cups", "Produce"),
         ("coconut milk", 0.5, "cup", "Canned Goods"), ("onion", 1, "medium", "Produce"),
         ("basmati rice", 0.5, "cup", "Grains")],
        ["Fry onion with curry spices",
         "Add chickpeas and coconut milk and simmer 15 minutes",
         "Stir in spinach until wilted and serve with rice"],
        ["vegetarian", "vegan", "gluten-free"], ["dinner", "main course"], ["indian"], "medium",
        ["plant-based", "comfort"],
    ),
    # Snacks
    _recipe(
        "12", "Apple with Almond Butter",
        "Crisp apple slices with a spoon of almond butter.",
        2, (200, 5, 25, 10, 5),
        [("apple", 1, "medium", "Produce"), ("almond butter", 1, "tbsp", "Nut Butters")],
        ["Slice the apple", "Serve with almond butter for dipping"],
        ["vegetarian", "vegan", "gluten-free"], ["snack"], ["american"], "easy",
        ["no-cook", "quick"],
    ),
    _recipe(
        "13", "Hummus with Veggie Sticks",
        "Protein-rich hummus with carrot and cucumber sticks.",
        5, (150, 6, 15, 8, 5),
        [("hummus", 0.25, "cup", "Deli"), ("carrot", 1, "medium", "Produce"),
         ("cucumber", 0.5, "cup", "Produce")],
        ["Cut vegetables into sticks", "Serve with hummus"],
        ["vegetarian", "vegan", "gluten-free"], ["snack"], ["mediterranean"], "easy",
        ["no-cook", "fiber-rich"],
    ),
    _recipe(
        "14", "Roasted Chickpeas",
        "Crunchy spiced chickpeas roasted until golden.",
        35, (130, 6, 20, 3, 6),
        [("chickpeas", 0.5, "cup", "Canned Goods"), ("olive oil", 1, "tsp", "Oils")],
        ["Pat chickpeas dry and toss with oil and spices",
         "Roast at 400F for 30 minutes, shaking halfway"],
        ["vegetarian", "vegan", "gluten-free"], ["snack"], ["indian"], "easy",
        ["plant-based", "crunchy"],
    ),
]
