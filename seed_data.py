"""
Built-in sample animals
v1.0.0

Inserted on launch when the local store is empty, so the list has
something to show before the first API refresh.
"""
from typing import List, Dict

# (id, name, species, breed, gender, age, description, location)
SEED_ANIMALS = [
  # Dogs
  (1, "Rex", "Dog", "Labrador Retriever", "Male", "2 years",
   "Friendly, playful and very affectionate. Loves running and playing with balls.", "Porto"),
  (2, "Bella", "Dog", "Golden Retriever", "Female", "3 years",
   "Gentle and very sociable. Perfect for families with children.", "Matosinhos"),
  (3, "Max", "Dog", "German Shepherd", "Male", "4 years",
   "Intelligent and loyal. Very protective of the family.", "Vila Nova de Gaia"),
  (4, "Luna", "Dog", "Siberian Husky", "Female", "2 years",
   "Energetic and adventurous. Loves walks and runs.", "Espinho"),
  (5, "Charlie", "Dog", "French Bulldog", "Male", "1 year",
   "Small and full of personality. Perfect for apartments.", "Gondomar"),

  # Cats
  (6, "Miau", "Cat", "Persian", "Female", "1 year",
   "Calm and quiet cat. Loves cuddles and naps in the sun.", "Porto"),
  (7, "Félix", "Cat", "Siamese", "Male", "2 years",
   "Very vocal and playful. Likes to sit on laps.", "Maia"),
  (8, "Whiskers", "Cat", "Street Cat", "Male", "3 years",
   "Rescued from the street. Already used to life indoors.", "Valongo"),
  (9, "Nala", "Cat", "Domestic Cat", "Female", "2 years",
   "Independent but affectionate. Likes playing with toy mice.", "São Mamede de Infesta"),
  (10, "Garfield", "Cat", "Street Cat", "Male", "5 years",
   "Adult and calm. Looking for a quiet, comfortable home.", "Ermesinde"),

  # More dogs
  (11, "Buddy", "Dog", "Cocker Spaniel", "Male", "1 year",
   "Very sociable and gentle. Loves water and swimming.", "Maia"),
  (12, "Daisy", "Dog", "Beagle", "Female", "3 years",
   "Small but full of energy. Loves sniffing around and exploring.", "Aveiro"),
  (13, "Thor", "Dog", "Saint Bernard", "Male", "4 years",
   "Big, soft and gentle. Excellent with families.", "Santa Maria da Feira"),
  (14, "Molly", "Dog", "Poodle", "Female", "2 years",
   "Smart and easy to train. Needs regular grooming.", "Oliveira de Azeméis"),

  # More cats
  (15, "Simba", "Cat", "Domestic Cat", "Male", "1 year",
   "Young and full of energy. Great for homes with a garden.", "Vila do Conde"),
]


def seed_fields() -> List[Dict]:
  """Seed animals as insertable field dicts"""
  return [
    {
      "id": animal_id,
      "name": name,
      "species": species,
      "breed": breed,
      "gender": gender,
      "age": age,
      "description": description,
      "photo_url": None,
      "location": location,
    }
    for (animal_id, name, species, breed, gender, age, description, location) in SEED_ANIMALS
  ]


def seed_if_empty(dal) -> int:
  """Insert the sample animals when the store has none. Returns how many were added."""
  if dal.count() > 0:
    return 0

  added = 0
  for fields in seed_fields():
    if dal.insert(fields):
      added += 1

  print(f"✅ Sample data created: {added} animals added")
  return added
