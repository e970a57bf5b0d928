"""
Sample catalog, filter presets and the demo account

Event dates are offsets from "today" so a fresh catalog always has
upcoming events.
"""
import datetime as dt
import logging
from typing import List, Optional

from eventfinder.core.security import hash_password
from eventfinder.schemas.event import ALL_CATEGORIES, ALL_CITIES, Event, EventCategory
from eventfinder.schemas.filters import PriceRange, SortKey
from eventfinder.schemas.user import UserRecord

logger = logging.getLogger(__name__)

DEMO_USER_EMAIL = "demo@eventfdr.com"
DEMO_USER_PASSWORD = "demo123"

EVENT_CATEGORIES = [ALL_CATEGORIES] + [c.value for c in EventCategory]

CITIES = [
    ALL_CITIES,
    "Mumbai",
    "Bangalore",
    "New Delhi",
    "Hyderabad",
    "Chennai",
    "Pune",
    "Kolkata",
    "Gurgaon",
    "Rishikesh",
]

PRICE_RANGES = [
    PriceRange(label="All Prices", min_price=0, max_price=None),
    PriceRange(label="Free", min_price=0, max_price=0),
    PriceRange(label="Under ₹1,000", min_price=1, max_price=999),
    PriceRange(label="₹1,000 - ₹3,000", min_price=1000, max_price=3000),
    PriceRange(label="₹3,000 - ₹5,000", min_price=3000, max_price=5000),
    PriceRange(label="Above ₹5,000", min_price=5000, max_price=None),
]

SORT_OPTIONS = [key.value for key in SortKey]

# (id, title, category, start offset days, length days, time, end time, venue,
#  address, city, price, capacity, registered, organizer, email, tags, featured)
_SAMPLES = [
    ("evt-001", "TechConf - Future of AI", EventCategory.TECHNOLOGY, 30, 2, "09:00", "18:00",
     "Bangalore International Exhibition Centre", "BIEC, Tumakuru Road", "Bangalore",
     2499, 5000, 3847, "TechEvents India", "events@techconf.in",
     ["AI", "Machine Learning", "Cloud", "Tech Conference"], True),
    ("evt-002", "Music Festival: Sounds of India", EventCategory.MUSIC, 60, 2, "17:00", "23:00",
     "Mahalaxmi Race Course", "Mahalaxmi, Mumbai", "Mumbai",
     1499, 15000, 8932, "Musical Nights Entertainment", "contact@musicalnights.com",
     ["Music", "Festival", "Live Concert", "Classical", "Contemporary"], True),
    ("evt-003", "Photography Workshop: Street & Portrait", EventCategory.ARTS_CULTURE, 37, 1, "10:00", "17:00",
     "India Habitat Centre", "Lodhi Estate", "New Delhi",
     3999, 50, 42, "Lens Masters Academy", "workshops@lensmasters.in",
     ["Photography", "Workshop", "Portrait", "Street Photography"], False),
    ("evt-004", "Startup Summit", EventCategory.BUSINESS, 50, 1, "08:30", "18:30",
     "Hitex Exhibition Center", "Madhapur", "Hyderabad",
     999, 2000, 1567, "Startup India Foundation", "summit@startupindia.org",
     ["Startup", "Business", "Networking", "Investment"], True),
    ("evt-005", "Yoga & Wellness Retreat", EventCategory.HEALTH_WELLNESS, 43, 1, "06:00", "18:00",
     "Ananda Resort", "Rishikesh", "Rishikesh",
     8999, 40, 35, "Wellness Way", "retreats@wellnessway.in",
     ["Yoga", "Meditation", "Wellness", "Retreat", "Ayurveda"], False),
    ("evt-006", "Culinary Masterclass: South Indian Cuisine", EventCategory.FOOD_DRINK, 33, 0, "10:00", "16:00",
     "Culinary Institute of Chennai", "Nungambakkam", "Chennai",
     2499, 20, 18, "Chef Academy", "classes@chefacademy.in",
     ["Cooking", "South Indian", "Masterclass", "Food"], False),
    ("evt-007", "Stand-up Comedy Night", EventCategory.ENTERTAINMENT, 40, 0, "20:00", "23:00",
     "Canvas Laugh Club", "Cyberhub, DLF Cyber City", "Gurgaon",
     799, 200, 175, "Laugh Out Loud Productions", "bookings@lolproductions.com",
     ["Comedy", "Stand-up", "Entertainment", "Night Out"], False),
    ("evt-008", "Marathon: Run for Green", EventCategory.SPORTS, 55, 0, "05:30", "11:00",
     "Cubbon Park", "Kasturba Road", "Bangalore",
     599, 10000, 6543, "Green Earth Foundation", "marathon@greenearth.org",
     ["Marathon", "Running", "Sports", "Fitness", "Environment"], True),
    ("evt-009", "Art Exhibition: Modern India", EventCategory.ARTS_CULTURE, 16, 27, "10:00", "19:00",
     "National Gallery of Modern Art", "Jaipur House, India Gate", "New Delhi",
     0, 500, 234, "NGMA Delhi", "exhibitions@ngmaindia.gov.in",
     ["Art", "Exhibition", "Contemporary", "Culture"], False),
    ("evt-010", "Blockchain & Web3 Summit", EventCategory.TECHNOLOGY, 80, 1, "09:00", "18:00",
     "JW Marriott", "Aerocity", "New Delhi",
     4999, 1000, 423, "Web3 India", "summit@web3india.com",
     ["Blockchain", "Web3", "Crypto", "DeFi", "NFT"], False),
]


def sample_events(today: Optional[dt.date] = None) -> List[Event]:
    today = today or dt.date.today()
    events = []
    for (event_id, title, category, offset, length, start_time, end_time, venue, address, city,
         price, capacity, registered, organizer, email, tags, featured) in _SAMPLES:
        start = today + dt.timedelta(days=offset)
        events.append(Event(
            id=event_id,
            title=title,
            short_description=f"{title} in {city}.",
            description=f"{title} at {venue}, {city}. {', '.join(tags)}.",
            category=category,
            date=start,
            time=start_time,
            end_date=start + dt.timedelta(days=length),
            end_time=end_time,
            venue=venue,
            address=address,
            city=city,
            price=price,
            capacity=capacity,
            registered=registered,
            organizer={"name": organizer, "email": email, "verified": True},
            tags=tags,
            featured=featured,
            highlights=[],
            schedule=[
                {"day": f"Day {n + 1}", "title": title, "time": f"{start_time} - {end_time}"}
                for n in range(length + 1)
            ][:3],
        ))
    return events


def demo_user() -> UserRecord:
    return UserRecord(
        id="demo-user",
        email=DEMO_USER_EMAIL,
        name="Demo User",
        phone="9876543210",
        password_hash=hash_password(DEMO_USER_PASSWORD),
    )


async def seed_stores(event_store, user_store) -> int:
    """Add sample events and the demo user where missing; returns events added"""
    added = 0
    for event in sample_events():
        if await event_store.get_event(event.id) is None:
            await event_store.add_event(event)
            added += 1
    if await user_store.get_by_email(DEMO_USER_EMAIL) is None:
        await user_store.add_user(demo_user())
    logger.info(f"🌱 Seeded {added} sample events")
    return added
