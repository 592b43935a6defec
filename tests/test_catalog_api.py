from models import Author, Category, WishlistItem


def test_category_crud(client, session):
    response = client.post('/api/categories', json={'name': 'FELSEFE', 'description': 'Düşünce tarihi'})
    assert response.status_code == 201
    category = response.get_json()
    # First palette color is picked when none is given
    assert category['color'] == '#3B82F6'

    response = client.put(f"/api/categories/{category['id']}", json={'color': '#F59E0B'})
    assert response.status_code == 200
    assert response.get_json()['color'] == '#F59E0B'
    assert response.get_json()['name'] == 'FELSEFE'

    response = client.delete(f"/api/categories/{category['id']}")
    assert response.get_json() == {'message': 'Category deleted successfully'}
    assert session.query(Category).count() == 0


def test_category_duplicate_name(client, category):
    response = client.post('/api/categories', json={'name': 'edebiyat'})
    assert response.status_code == 400
    assert response.get_json() == {'error': 'Category name already exists'}


def test_category_bad_color(client):
    response = client.post('/api/categories', json={'name': 'HOBI', 'color': 'red'})
    assert response.status_code == 400
    assert response.get_json()['errors'][0]['field'] == 'color'


def test_category_with_books_cannot_be_deleted(client, category, make_book, session):
    make_book(category_id=category.id)

    response = client.delete(f'/api/categories/{category.id}')

    assert response.status_code == 400
    assert response.get_json() == {'error': 'Cannot delete category that has books assigned to it'}
    assert session.query(Category).count() == 1


def test_category_listing_and_books(client, category, make_book):
    make_book('Tutunamayanlar', category_id=category.id, sub_category='ROMAN', is_read=True, rating=5)
    make_book('Korkuyu Beklerken', category_id=category.id, sub_category='OYKU')

    listing = client.get('/api/categories').get_json()
    assert listing[0]['name'] == 'EDEBIYAT'
    assert listing[0]['book_count'] == 2

    body = client.get(f'/api/categories/{category.id}/books?subcategory=ROMAN').get_json()
    assert [book['title'] for book in body['books']] == ['Tutunamayanlar']
    assert body['category']['total_books'] == 1
    assert body['category']['read_books'] == 1
    assert body['category']['avg_rating'] == 5.0

    distribution = client.get('/api/categories/distribution').get_json()
    assert distribution[0]['book_count'] == 2


def test_sub_categories(client):
    assert 'ROMAN' in client.get('/api/sub-categories').get_json()['EDEBIYAT']

    response = client.get('/api/sub-categories/BILIM%20ve%20SANAT')
    assert {'name': 'SINEMA', 'value': 'SINEMA'} in response.get_json()

    response = client.get('/api/sub-categories/YOK')
    assert response.status_code == 404
    assert response.get_json() == {'error': 'Category not found'}


def test_author_crud(client, session):
    response = client.post('/api/authors', json={'name': 'Oğuz Atay', 'birth_date': '1934-10-12'})
    assert response.status_code == 201
    author = response.get_json()
    assert author['birth_date'] == '1934-10-12'

    response = client.put(f"/api/authors/{author['id']}", json={'nationality': 'Türk'})
    assert response.get_json()['nationality'] == 'Türk'
    assert response.get_json()['name'] == 'Oğuz Atay'

    client.delete(f"/api/authors/{author['id']}")
    assert session.query(Author).count() == 0


def test_author_with_books_cannot_be_deleted(client, make_book, session):
    author = Author(name='Oğuz Atay')
    session.add(author)
    session.commit()
    make_book(author_id=author.id)

    response = client.delete(f'/api/authors/{author.id}')

    assert response.status_code == 400
    assert client.get('/api/authors').get_json()[0]['book_count'] == 1


def test_authors_from_books(client, make_book):
    make_book('Kurk Mantolu Madonna', 'Sabahattin', 'Ali', is_read=True)
    make_book('Icimizdeki Seytan', 'Sabahattin', 'Ali')

    authors = client.get('/api/authors/from-books').get_json()
    assert authors[0]['full_name'] == 'Sabahattin Ali'
    assert authors[0]['book_count'] == 2

    body = client.get('/api/authors/books/Sabahattin/Ali').get_json()
    assert body['author']['read_books'] == 1
    assert len(body['books']) == 2


def test_wishlist_flow(client, session):
    response = client.post('/api/wishlist', json={
        'book_name': 'Beyaz Kale',
        'author_name': 'Orhan Pamuk',
        'price': 85,
    })
    assert response.status_code == 201
    wish = response.get_json()
    assert wish['is_purchased'] is False

    response = client.post('/api/wishlist', json={'book_name': 'beyaz kale', 'author_name': 'ORHAN PAMUK'})
    assert response.status_code == 400
    assert response.get_json() == {'error': 'This book is already in your wishlist'}

    response = client.put(f"/api/wishlist/{wish['id']}", json={'publisher': 'YKY'})
    assert response.get_json()['publisher'] == 'YKY'

    response = client.patch(f"/api/wishlist/{wish['id']}/purchase")
    assert response.status_code == 200
    assert response.get_json()['wish']['is_purchased'] is True

    assert client.get('/api/wishlist/stats').get_json()['purchased_wishes'] == 1
    assert [w['book_name'] for w in client.get('/api/wishlist?search=pamuk').get_json()] == ['Beyaz Kale']

    response = client.delete(f"/api/wishlist/{wish['id']}")
    assert response.status_code == 200
    assert session.query(WishlistItem).count() == 0


def test_wishlist_validation(client):
    response = client.post('/api/wishlist', json={'book_name': 'Kar'})
    assert response.status_code == 400
    assert response.get_json()['errors'] == [{'field': 'author_name', 'msg': 'Author name is required'}]


def test_purchase_unknown_wish(client):
    response = client.patch('/api/wishlist/999/purchase')
    assert response.status_code == 404
