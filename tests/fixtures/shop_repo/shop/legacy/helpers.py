from shop.api.views import render

VERSION = render.__name__
