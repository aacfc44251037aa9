# transparency/seed.py
# Founding partners always shown on the partners page; admin-added partners are merged after them
FOUNDING_PARTNERS = [
    {
        "id": "grow-with-google",
        "name": "Grow with Google",
        "logo": "/grow-with-google-logo.png",
        "website": "https://grow.google",
        "featured": True,
    },
    {
        "id": "goodstack",
        "name": "GoodStack",
        "logo": "/60.png",
        "website": "https://goodstack.org/",
        "featured": True,
    },
    {
        "id": "techsoup",
        "name": "TechSoup",
        "logo": "/TechSoup-US-Logo.png",
        "website": "https://www.techsoup.org",
        "featured": True,
    },
]
