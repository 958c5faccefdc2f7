from shop.core.models import Order

session = Order(id=0)
