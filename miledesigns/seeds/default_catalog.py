# miledesigns/seeds/default_catalog.py
# Built-in seed content: used on first run (no row yet) and to fill
# anything a stored aggregate is missing.
from __future__ import annotations

import copy

from miledesigns.core.settings import settings
from miledesigns.schemas.content import ABOUT_CONTENT_ID, ADMIN_PROFILE_ID, CONTACT_DETAILS_ID

_UNSPLASH = "https://images.unsplash.com/{}?auto=format&fit=crop&q=80&w={}"


def _photo(photo_id: str, width: int = 800) -> str:
    return _UNSPLASH.format(photo_id, width)


_CATALOG: dict = {
    "projects": [
        {
            "id": "1",
            "title": "The Obsidian Villa",
            "category": "Residential",
            "location": "Beverly Hills, CA",
            "imageUrl": _photo("photo-1600585154340-be6161a56a0c", 2070),
            "year": 2023,
            "description": (
                "A masterclass in modern minimalism, The Obsidian Villa integrates raw concrete textures "
                "with expansive glass facades, a cantilevered terrace and an infinity pool."
            ),
            "tags": ["Luxury", "Minimalist", "Smart Home"],
            "features": ["Solar Integration", "Smart Home Automation", "Custom Millwork", "Sustainable Water Recycling"],
            "gallery": [
                _photo("photo-1600596542815-ffad4c1539a9"),
                _photo("photo-1600607687920-4e2a09cf159d"),
                _photo("photo-1600607687644-c7171b42498f"),
            ],
        },
        {
            "id": "2",
            "title": "Nexus Hub",
            "category": "Commercial",
            "location": "Austin, TX",
            "imageUrl": _photo("photo-1497366216548-37526070297c", 2070),
            "year": 2024,
            "description": (
                "A 50,000 sq. ft. collaborative workspace in Austin's tech corridor with a three-story "
                "interior vertical garden and high-efficiency climate control."
            ),
            "tags": ["Biophilic", "Sustainable", "Tech"],
            "features": ["LEED Platinum Certified", "Open-Concept Layouts", "Biophilic Design", "Advanced VRV Cooling"],
            "gallery": [
                _photo("photo-1497366811353-6870744d04b2"),
                _photo("photo-1497366754035-f200968a6e72"),
                _photo("photo-1431540015161-0bf868a2d407"),
            ],
        },
        {
            "id": "3",
            "title": "Green Canopy Estate",
            "category": "Residential",
            "location": "Seattle, WA",
            "imageUrl": _photo("photo-1512917774080-9991f1c4c750", 2070),
            "year": 2022,
            "description": (
                "A timber-frame estate built from reclaimed Pacific Northwest cedar, balancing luxury "
                "with environmental responsibility."
            ),
            "tags": ["Sustainable", "Timber", "Modern"],
            "features": ["Zero-Carbon Footprint", "Rainwater Harvesting", "Triple-Pane Glazing", "Native Landscaping"],
            "gallery": [
                _photo("photo-1513584684374-8bdb7483fe8f"),
                _photo("photo-1518780664697-55e3ad937233"),
                _photo("photo-1502005229762-cf1b2da7c5d6"),
            ],
        },
        {
            "id": "4",
            "title": "Industrial Loft X",
            "category": "Industrial",
            "location": "Brooklyn, NY",
            "imageUrl": _photo("photo-1515263487990-61b07816b324", 2070),
            "year": 2023,
            "description": (
                "A 1920s warehouse turned creative studio, keeping exposed brick and steel beams while adding "
                "acoustic treatment and high-speed data infrastructure."
            ),
            "tags": ["Industrial", "Adaptive Reuse", "Modern"],
            "features": ["Historic Retrofitting", "Acoustic Engineering", "Custom Industrial Finishes", "Mezzanine Studio"],
            "gallery": [
                _photo("photo-1515263487990-61b07816b324"),
                _photo("photo-1524758631624-e2822e304c36"),
                _photo("photo-1536376074432-8864a665977a"),
            ],
        },
    ],
    "services": [
        {
            "id": "arch-design",
            "title": "Architectural Design",
            "description": "Bespoke architectural solutions that blend aesthetics with structural integrity.",
            "icon": "📐",
            "imageUrl": "https://picsum.photos/seed/arch/800/600",
        },
        {
            "id": "new-const",
            "title": "New Construction",
            "description": "Turnkey construction projects from ground-breaking to final handover.",
            "icon": "🏗️",
            "imageUrl": "https://picsum.photos/seed/const/800/600",
        },
        {
            "id": "interior",
            "title": "Interior Curation",
            "description": "Modern, sustainable, and functional interior designs for living and working.",
            "icon": "🛋️",
            "imageUrl": "https://picsum.photos/seed/interior/800/600",
        },
        {
            "id": "reno",
            "title": "Renovation & Retrofit",
            "description": "Breathing new life into existing structures with modern upgrades.",
            "icon": "🔨",
            "imageUrl": "https://picsum.photos/seed/reno/800/600",
        },
    ],
    "testimonials": [
        {
            "id": "t1",
            "name": "Julian Montgomery",
            "projectType": "Luxury Residential",
            "feedback": (
                "Their attention to detail during the architectural phase was unparalleled. They didn't just "
                "build a house; they built our dream home with precision and care."
            ),
            "rating": 5,
            "avatarUrl": "https://i.pravatar.cc/150?u=julian",
        },
        {
            "id": "t2",
            "name": "Sarah Kensington",
            "projectType": "Commercial Office Hub",
            "feedback": (
                "Professionalism and efficiency. The Nexus Hub project was delivered ahead of schedule "
                "without compromising on the high-end finishes we requested."
            ),
            "rating": 5,
            "avatarUrl": "https://i.pravatar.cc/150?u=sarah",
        },
        {
            "id": "t3",
            "name": "Dr. Elena Rossi",
            "projectType": "Sustainable Estate",
            "feedback": (
                "The sustainable materials they suggested look stunning and have significantly reduced our "
                "energy footprint."
            ),
            "rating": 5,
            "avatarUrl": "https://i.pravatar.cc/150?u=elena",
        },
    ],
    "socialLinks": [
        {"id": "social-linkedin", "name": "LinkedIn", "platform": "LinkedIn",
         "url": "https://www.linkedin.com/company/miledesigns", "enabled": True},
        {"id": "social-instagram", "name": "Instagram", "platform": "Instagram",
         "url": "https://www.instagram.com/miledesigns", "enabled": True},
        {"id": "social-facebook", "name": "Facebook", "platform": "Facebook",
         "url": "https://www.facebook.com/miledesigns", "enabled": True},
        {"id": "social-youtube", "name": "YouTube", "platform": "YouTube",
         "url": "https://www.youtube.com/@miledesigns", "enabled": True},
        {"id": "social-tiktok", "name": "TikTok", "platform": "TikTok",
         "url": "https://www.tiktok.com/@miledesigns", "enabled": False},
        {"id": "social-website", "name": "Website", "platform": "Website",
         "url": "https://miledesigns.com", "enabled": False},
    ],
    "teamMembers": [
        {
            "id": "team-1",
            "name": "Miles Okafor",
            "role": "Founder & Principal Architect",
            "bio": "Leads every project from first sketch to handover, with two decades in residential design.",
            "imageUrl": _photo("photo-1560250097-0b93528c311a", 600),
        },
        {
            "id": "team-2",
            "name": "Adaeze Nwosu",
            "role": "Head of Construction",
            "bio": "Runs site operations, scheduling and quality control across all active builds.",
            "imageUrl": _photo("photo-1573496359142-b8d87734a5a2", 600),
        },
        {
            "id": "team-3",
            "name": "Daniel Reyes",
            "role": "Interior Design Lead",
            "bio": "Shapes interiors around light, material and the way people actually live.",
            "imageUrl": _photo("photo-1519085360753-af0119f7cbe7", 600),
        },
    ],
    "vlogEntries": [
        {
            "id": "vlog-1",
            "title": "From Foundation to Frame",
            "topic": "Construction",
            "duration": "12:40",
            "thumbnailUrl": _photo("photo-1503387762-592dee58c460", 800),
            "url": "https://www.youtube.com/@miledesigns",
        },
        {
            "id": "vlog-2",
            "title": "Choosing Sustainable Materials",
            "topic": "Design",
            "duration": "08:15",
            "thumbnailUrl": _photo("photo-1541888946425-d81bb19240f5", 800),
            "url": "https://www.youtube.com/@miledesigns",
        },
    ],
    "contactDetails": {
        "id": CONTACT_DETAILS_ID,
        "location": "Lekki Phase 1, Lagos, Nigeria",
        "phoneNumbers": ["+234 800 000 0000", "+234 800 000 0001"],
        "inquiryEmail": "hello@miledesigns.com",
        "inquiryWhatsAppNumber": "2348000000000",
        "showFloatingWhatsApp": True,
        "floatingWhatsAppMessage": "Hello MILEDESIGNS, I'd like to discuss a project.",
    },
    "aboutContent": {
        "id": ABOUT_CONTENT_ID,
        "badge": "Our Legacy",
        "headingPrefix": "Crafting environments that",
        "headingHighlight": "inspire",
        "headingSuffix": "human connection.",
        "introText": (
            "Founded in 2008, MILEDESIGNS Design & Build was born from a simple realization: the spaces "
            "we inhabit fundamentally shape who we are."
        ),
        "bodyText": (
            "Our team of architects, master craftsmen and sustainability experts believes every blueprint "
            "is a promise of quality, backed by rigorous material selection and modern construction technology."
        ),
        "stats": [
            {"value": "15", "suffix": "+", "label": "Years of Excellence",
             "description": "Designing and building since 2008."},
            {"value": "450", "suffix": "+", "label": "Projects Handed Over",
             "description": "Residential, commercial and industrial."},
            {"value": "98", "suffix": "%", "label": "Client Satisfaction",
             "description": "Measured at every handover."},
        ],
        "homeBackgroundImages": [
            _photo("photo-1600585154340-be6161a56a0c", 2070),
            _photo("photo-1497366216548-37526070297c", 2070),
        ],
        "certificateImages": [
            _photo("photo-1589829545856-d10d557cf95f", 800),
        ],
        "imageUrl": _photo("photo-1503387762-592dee58c460", 2000),
        "visionText": "To be the most trusted name in design-led construction.",
        "ctaText": "Have a project in mind?",
        "ctaButtonText": "Start a Conversation",
    },
    "adminProfile": {
        "id": ADMIN_PROFILE_ID,
        "name": "Site Administrator",
        "email": "admin@miledesigns.com",
        "avatarUrl": "",
        "subAdmins": [],
    },
}


def default_site_content() -> dict:
    """
    Fresh, complete default aggregate. Callers own the returned dict.
    Contact values may be overridden from settings (INQUIRY_EMAIL / INQUIRY_WHATSAPP_NUMBER).
    """
    data = copy.deepcopy(_CATALOG)
    contact = data["contactDetails"]
    if settings.INQUIRY_EMAIL:
        contact["inquiryEmail"] = settings.INQUIRY_EMAIL
    if settings.INQUIRY_WHATSAPP_NUMBER:
        contact["inquiryWhatsAppNumber"] = settings.INQUIRY_WHATSAPP_NUMBER
    return data
