"""
Configuration centrale pour le solveur Breach Protocol.

Ce fichier contient tous les paramètres configurables du solveur,
y compris l'alphabet des symboles, les budgets de recherche et le worker.
"""

# Alphabet des symboles (code 1-based -> symbole affiché)
SYMBOL_CODES = ["1C", "55", "BD", "E9", "7A", "FF", "C4", "B2", "3F", "8E"]

# Paramètres du puzzle (valeurs par défaut de l'interface d'origine)
PUZZLE_CONFIG = {
    'grid_size': 5,            # Grille carrée 5x5
    'buffer_size': 4,          # Longueur maximale du chemin
    'daemon_count': 1,         # Nombre de daemons à saisir
    'max_daemon_length': 6,    # Nombre de cases par daemon
}

# Paramètres de la recherche
SOLVER_CONFIG = {
    'max_iterations': 100000,          # Garde-fou : nombre maximum d'états traités
    'reorder_interval': 200,           # Cadence de re-tri de la file (0 = FIFO pur)
    'progress_interval': 1000,         # Cadence des notifications de progression
    'max_solutions': 5,                # Nombre de solutions classées retournées
    'stop_on_full_completion': False,  # Mode "meilleure solution seule"
    'prune_dead_branches': True,       # Heuristique de continuation (élagage)
}

# Longueur de chemin (parent) à partir de laquelle l'élagage s'applique
PRUNING_MIN_LENGTH = 3

# Paramètres du worker de résolution (processus séparé)
WORKER_CONFIG = {
    'start_method': 'spawn',       # Méthode de démarrage multiprocessing
    'poll_interval': 0.05,         # Attente (s) du listener sur la file sortante
    'join_timeout': 2.0,           # Attente maximale (s) après terminate()
    'progress_queue_size': 1000,   # Taille maximale de la file sortante
}

# Chemins des fichiers
PATHS = {
    'logs': 'logs',
}
