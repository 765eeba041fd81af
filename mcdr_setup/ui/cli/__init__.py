"""Terminal UI — click rendering of wizard menus."""
