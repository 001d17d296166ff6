"""
Input validation schemas using Pydantic for shopping-list requests.
"""
from pydantic import BaseModel, Field, field_validator
from typing import List, Literal, Optional


class ShoppingListItemInput(BaseModel):
    """Schema for a new shopping list item."""
    item_name: str = Field(..., min_length=1, max_length=255)
    quantity: float = Field(..., ge=0)
    unit: str = Field("", max_length=50)
    category: Optional[str] = Field(None, max_length=100)
    estimated_cost: Optional[float] = Field(None, ge=0)
    actual_cost: Optional[float] = Field(None, ge=0)
    is_purchased: bool = False
    priority: Literal["low", "medium", "high"] = "medium"
    notes: str = ""

    @field_validator('item_name', 'unit')
    @classmethod
    def strip_whitespace(cls, v):
        """Remove leading/trailing whitespace."""
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator('item_name')
    @classmethod
    def validate_name(cls, v):
        if not v:
            raise ValueError('Item name cannot be empty')
        return v


class ShoppingListItemUpdate(BaseModel):
    """Partial update for an item; only fields that are sent get applied."""
    item_name: Optional[str] = Field(None, min_length=1, max_length=255)
    quantity: Optional[float] = Field(None, ge=0)
    unit: Optional[str] = Field(None, max_length=50)
    category: Optional[str] = Field(None, max_length=100)
    estimated_cost: Optional[float] = Field(None, ge=0)
    actual_cost: Optional[float] = Field(None, ge=0)
    is_purchased: Optional[bool] = None
    priority: Optional[Literal["low", "medium", "high"]] = None
    notes: Optional[str] = None

    @field_validator('item_name', 'quantity', 'unit', 'is_purchased', 'priority', mode='before')
    @classmethod
    def reject_null(cls, v, info):
        """Omit a field to leave it unchanged; an explicit null is not a value."""
        if v is None:
            raise ValueError(f'{info.field_name} cannot be null')
        return v

    @field_validator('item_name', 'unit')
    @classmethod
    def strip_whitespace(cls, v):
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator('item_name')
    @classmethod
    def validate_name(cls, v):
        if not v:
            raise ValueError('Item name cannot be empty')
        return v


class ShoppingListInput(BaseModel):
    """Schema for a manually created shopping list."""
    name: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    status: Literal["active", "completed", "archived"] = "active"
    total_estimated_cost: float = Field(0, ge=0)
    items: List[ShoppingListItemInput] = Field(default_factory=list)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError('List name cannot be empty')
        return v.strip()


class RecipeIngredientInput(BaseModel):
    """One ingredient line as written in a recipe."""
    name: str = Field(..., min_length=1, max_length=255)
    quantity: float = Field(0, ge=0)
    unit: str = Field("", max_length=50)
    category: Optional[str] = None


class GenerateListInput(BaseModel):
    """Schema for generating a store list from recipe ingredients."""
    list_name: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    servings_multiplier: float = Field(1, gt=0, le=100)
    ingredients: List[RecipeIngredientInput]

    @field_validator('list_name')
    @classmethod
    def validate_list_name(cls, v):
        if not v.strip():
            raise ValueError('Please enter a list name')
        return v.strip()

    @field_validator('ingredients')
    @classmethod
    def validate_ingredients(cls, v):
        """Ensure at least one ingredient was selected."""
        if not v:
            raise ValueError('Please provide at least one ingredient')
        return v
