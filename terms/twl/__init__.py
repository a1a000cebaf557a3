"""Widget tree, focus navigation, split panels and small controls."""