# catalog/models.py
#
# Purpose:
# - Minimal product catalog records the storefront exposes to the order
#   controls (product ids and their category ids).
#
# Notes for developers:
# - Prices, stock and cart state belong to the host commerce platform and are
#   not modelled here.
#
from django.db import models


# -------------------------
# Product category
# -------------------------
class Category(models.Model):
    name = models.CharField(max_length=200)
    slug = models.SlugField(max_length=200, unique=True)

    class Meta:
        verbose_name_plural = "categories"

    def __str__(self):
        return self.name


# -------------------------
# Product
# -------------------------
class Product(models.Model):
    """
    A sellable product. 'categories' drives category-scoped order restrictions.
    """
    name = models.CharField(max_length=200)
    categories = models.ManyToManyField(Category, related_name="products", blank=True)
    active = models.BooleanField(default=True)

    def __str__(self):
        return self.name


def product_category_ids(product_id) -> set:
    """
    Category ids assigned to 'product_id' (empty for unknown products).
    """
    return set(
        Product.categories.through.objects.filter(product_id=product_id).values_list(
            "category_id", flat=True
        )
    )
