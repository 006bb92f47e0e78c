# ABOUTME: Canned Google Books API response fixtures for testing.
# ABOUTME: Provides realistic volumes JSON for ISBN lookups and intitle/inauthor searches.

ISBN_RESPONSE = {
    "kind": "books#volumes",
    "totalItems": 1,
    "items": [
        {
            "kind": "books#volume",
            "id": "LhOlDwAAQBAJ",
            "volumeInfo": {
                "title": "The Pragmatic Programmer",
                "subtitle": "Your journey to mastery, 20th Anniversary Edition",
                "authors": ["David Thomas", "Andrew Hunt"],
                "publisher": "Addison-Wesley Professional",
                "publishedDate": "2019-07-30",
                "description": "  Straight from the programming trenches.  ",
                "industryIdentifiers": [
                    {"type": "ISBN_13", "identifier": "9780135957059"},
                    {"type": "ISBN_10", "identifier": "0135957052"},
                ],
                "pageCount": 352,
                "categories": ["Computers", " "],
                "imageLinks": {
                    "smallThumbnail": "http://books.google.com/books/content?id=LhOlDwAAQBAJ&printsec=frontcover&img=1&zoom=5&source=gbs_api",
                    "thumbnail": "http://books.google.com/books/content?id=LhOlDwAAQBAJ&printsec=frontcover&img=1&zoom=1&source=gbs_api",
                },
                "language": "en",
            },
        }
    ],
}

ISBN_RESPONSE_NO_AUTHORS = {
    "kind": "books#volumes",
    "totalItems": 1,
    "items": [{"volumeInfo": {"title": "Anonymous Pamphlet"}}],
}

EMPTY_RESPONSE = {"kind": "books#volumes", "totalItems": 0}

SEARCH_RESPONSE = {
    "kind": "books#volumes",
    "totalItems": 3,
    "items": [
        {
            "volumeInfo": {
                "title": "Dune Messiah",
                "authors": ["Frank Herbert"],
                "industryIdentifiers": [{"type": "ISBN_13", "identifier": "9780593098233"}],
            }
        },
        {
            "volumeInfo": {
                "title": "Dune",
                "authors": ["Frank Herbert"],
                "publisher": "Ace",
                "industryIdentifiers": [
                    {"type": "ISBN_10", "identifier": "0441013597"},
                    {"type": "ISBN_13", "identifier": "9780441013593"},
                ],
            }
        },
        {"volumeInfo": {"authors": ["Nobody"]}},
    ],
}
