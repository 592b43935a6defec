from app import create_app
from cli_commands import seed_categories
from models import db, Book, Category, ReadingHistoryEntry, CurrentlyReadingEntry, BorrowedBookEntry, WishlistItem
from services.library_state import LibraryStateTracker
from datetime import datetime, timedelta

app = create_app()

with app.app_context():
    db.create_all()

    print("Clearing existing data...")
    ReadingHistoryEntry.query.delete()
    CurrentlyReadingEntry.query.delete()
    BorrowedBookEntry.query.delete()
    WishlistItem.query.delete()
    Book.query.delete()
    db.session.commit()

    print("Creating categories...")
    seed_categories()
    categories = {c.name: c for c in Category.query.all()}

    tracker = LibraryStateTracker()

    print("Creating sample books...")
    sample_books = [
        {
            'title': 'Tutunamayanlar',
            'author_first_name': 'Oğuz',
            'author_last_name': 'Atay',
            'category': 'EDEBIYAT',
            'sub_category': 'ROMAN',
            'publisher': 'İletişim',
            'pages': 724,
            'publication_year': 1972,
            'price': 180.0,
            'finished': datetime.utcnow() - timedelta(days=40),
            'rating': 5,
        },
        {
            'title': 'Kürk Mantolu Madonna',
            'author_first_name': 'Sabahattin',
            'author_last_name': 'Ali',
            'category': 'EDEBIYAT',
            'sub_category': 'ROMAN',
            'publisher': 'YKY',
            'pages': 160,
            'publication_year': 1943,
            'price': 45.0,
            'finished': datetime.utcnow() - timedelta(days=12),
            'rating': 4,
        },
        {
            'title': 'İçimizdeki Şeytan',
            'author_first_name': 'Sabahattin',
            'author_last_name': 'Ali',
            'category': 'EDEBIYAT',
            'sub_category': 'ROMAN',
            'publisher': 'YKY',
            'pages': 272,
            'publication_year': 1940,
            'price': 60.0,
        },
        {
            'title': 'Nutuk',
            'author_first_name': 'Mustafa Kemal',
            'author_last_name': 'Atatürk',
            'category': 'TARIH',
            'sub_category': 'TARIH',
            'pages': 600,
            'publication_year': 1927,
            'price': 120.0,
            'finished': datetime.utcnow() - timedelta(days=90),
            'rating': 5,
        },
        {
            'title': 'Sofie\'nin Dünyası',
            'author_first_name': 'Jostein',
            'author_last_name': 'Gaarder',
            'translator': 'Mustafa Aslan',
            'category': 'FELSEFE',
            'sub_category': 'FELSEFE BILIMI',
            'publisher': 'Pan',
            'pages': 560,
            'publication_year': 1991,
            'price': 95.5,
        },
        {
            'title': 'Kozmos',
            'author_first_name': 'Carl',
            'author_last_name': 'Sagan',
            'translator': 'Reşit Aşçıoğlu',
            'category': 'BILIM ve SANAT',
            'sub_category': 'POPULER BILIM',
            'publisher': 'Altın Kitaplar',
            'pages': 370,
            'publication_year': 1980,
            'price': 110.0,
            'finished': datetime.utcnow() - timedelta(days=3),
            'rating': 4,
        },
        {
            'title': 'Mesnevi',
            'author_first_name': 'Mevlana',
            'author_last_name': 'Celaleddin Rumi',
            'category': 'DIN-MITOLOJI',
            'sub_category': 'TASAVVUF',
            'pages': 900,
            'price': 250.0,
        },
    ]

    books = {}
    for data in sample_books:
        data = dict(data)
        finished = data.pop('finished', None)
        rating = data.pop('rating', None)
        category = categories[data.pop('category')]
        book = tracker.create_book(category_id=category.id, **data)
        if finished:
            tracker.mark_as_read(book.id, rating=rating, finish_date=finished)
        books[book.title] = book

    print("Creating reading and lending records...")
    entry = tracker.start_reading(books['Sofie\'nin Dünyası'].id, current_page=120)
    tracker.update_progress(entry.id, current_page=210, notes='Descartes bölümü')
    tracker.lend_book(
        books['İçimizdeki Şeytan'].id,
        borrower_name='Ayşe Yılmaz',
        borrower_contact='ayse@example.com',
        borrowed_date=datetime.utcnow() - timedelta(days=75),
    )

    print("Creating wishlist...")
    wishes = [
        WishlistItem(book_name='Saatleri Ayarlama Enstitüsü', author_name='Ahmet Hamdi Tanpınar', price=85.0),
        WishlistItem(book_name='Beyaz Kale', author_name='Orhan Pamuk', publisher='YKY'),
    ]
    db.session.add_all(wishes)
    db.session.commit()

    print(f"Successfully added {len(sample_books)} sample books!")
    print(f"Created {len(wishes)} wishes!")
    print("\nYou can now run 'flask run' to start the application!")
