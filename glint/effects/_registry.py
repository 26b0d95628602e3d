from ._base import EffectDefinition


class EffectRegistry:
    """An immutable catalog of effect definitions.

    The definitions are given on construction and cannot be changed
    afterwards. To extend a catalog, use ``extended()``, which returns a
    new registry. A registry is passed explicitly to everything that
    needs to look up effects.
    """

    def __init__(self, definitions=()):
        self._store = {}
        for definition in definitions:
            if not isinstance(definition, EffectDefinition):
                raise TypeError(f"Expected EffectDefinition, got {definition!r}.")
            if definition.id in self._store:
                raise ValueError(
                    f"Each effect id can only be registered once: '{definition.id}'."
                )
            self._store[definition.id] = definition

    def __repr__(self):
        return f"<EffectRegistry with {len(self._store)} effects>"

    def __len__(self):
        return len(self._store)

    def __iter__(self):
        return iter(self._store.values())

    def __contains__(self, effect_id):
        return effect_id in self._store

    def __getitem__(self, effect_id):
        try:
            return self._store[effect_id]
        except KeyError:
            raise KeyError(f"Unknown effect '{effect_id}'.") from None

    def get(self, effect_id, default=None):
        """Get the definition for the given id, or default if there is none."""
        return self._store.get(effect_id, default)

    def ids(self):
        """Get the list of registered effect ids."""
        return list(self._store)

    def by_category(self, category):
        """Get the definitions of the given category, sorted by order."""
        definitions = [d for d in self._store.values() if d.category == category]
        return sorted(definitions, key=lambda d: d.order)

    def extended(self, *definitions):
        """Get a new registry with the definitions of this one plus the given ones."""
        return EffectRegistry([*self._store.values(), *definitions])
