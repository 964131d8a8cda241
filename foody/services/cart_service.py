"""
Cart mutations. Every operation returns the refreshed cart with products loaded.
"""
from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from foody.database.models import Cart, CartItem, User
from foody.repositories import CartRepository, ProductRepository


class CartService:

    @staticmethod
    async def _save(db: AsyncSession, cart: Cart) -> Cart:
        """Commit, then reload the cart with its lines and their products"""
        cart_id = cart.id
        await db.commit()
        return await CartRepository(db).reload(cart_id)

    @staticmethod
    async def get_cart(db: AsyncSession, user: User) -> Cart:
        cart = await CartRepository(db).get_or_create(user.id)
        return await CartService._save(db, cart)

    @staticmethod
    async def add_item(db: AsyncSession, user: User, product_id: int, quantity: int = 1) -> Cart:
        """Add a product, merging into the existing line if there is one"""
        product = await ProductRepository(db).get(product_id)
        if product is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")

        cart = await CartRepository(db).get_or_create(user.id)
        existing = cart.find_item(product_id)
        if existing is not None:
            existing.quantity += quantity
        else:
            cart.items.append(CartItem(product=product, quantity=quantity))
        return await CartService._save(db, cart)

    @staticmethod
    async def update_item(db: AsyncSession, user: User, product_id: int, quantity: int) -> Cart:
        """Set a line's quantity; zero or less removes the line"""
        cart = await CartRepository(db).get_or_create(user.id)
        item = cart.find_item(product_id)
        if item is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Item not in cart")

        if quantity <= 0:
            cart.items.remove(item)
        else:
            item.quantity = quantity
        return await CartService._save(db, cart)

    @staticmethod
    async def remove_item(db: AsyncSession, user: User, product_id: int) -> Cart:
        cart = await CartRepository(db).get_or_create(user.id)
        item = cart.find_item(product_id)
        if item is not None:
            cart.items.remove(item)
        return await CartService._save(db, cart)

    @staticmethod
    async def clear(db: AsyncSession, user: User) -> Cart:
        cart = await CartRepository(db).get_or_create(user.id)
        cart.items.clear()
        return await CartService._save(db, cart)
