"""Inventory bounded context: ingredients, recipes and stock consumption."""
