"""Default OHADA chart of accounts loaded by ``chart init``.

Each row is (code, label, category, normal_balance, description).
"""

DEFAULT_CHART = [
    ("1", "Comptes de ressources durables", "equity", None, "Capitaux propres et ressources assimilées"),
    ("10", "Capital", None, "credit", None),
    ("101", "Capital social", None, None, None),
    ("102", "Capital souscrit - non appelé", None, None, None),
    ("109", "Actionnaires, capital souscrit - non appelé", None, None, None),
    ("11", "Réserves", None, "credit", None),
    ("111", "Réserve légale", None, None, None),
    ("112", "Réserves statutaires", None, None, None),
    ("113", "Réserves facultatives", None, None, None),
    ("12", "Report à nouveau", None, None, None),
    ("121", "Report à nouveau créditeur", None, None, None),
    ("129", "Report à nouveau débiteur", None, None, None),
    ("2", "Comptes d'actif immobilisé", "asset", None, "Immobilisations incorporelles, corporelles et financières"),
    ("21", "Immobilisations incorporelles", None, "debit", None),
    ("211", "Frais de développement", None, None, None),
    ("212", "Brevets, licences et logiciels", None, None, None),
    ("213", "Fonds commercial", None, None, None),
    ("22", "Terrains", None, "debit", None),
    ("221", "Terrains agricoles et forestiers", None, None, None),
    ("222", "Terrains nus", None, None, None),
    ("223", "Terrains bâtis", None, None, None),
    ("3", "Comptes de stocks", "asset", None, "Stocks de marchandises, matières et produits"),
    ("31", "Marchandises", None, "debit", None),
    ("311", "Marchandises A", None, None, None),
    ("312", "Marchandises B", None, None, None),
    ("32", "Matières premières", None, "debit", None),
    ("321", "Matières premières A", None, None, None),
    ("322", "Matières premières B", None, None, None),
    ("4", "Comptes de tiers", None, None, "Créances et dettes de l'entreprise"),
    ("40", "Fournisseurs", None, "credit", None),
    ("401", "Fournisseurs, dettes en compte", None, None, None),
    ("402", "Fournisseurs, effets à payer", None, None, None),
    ("41", "Clients", None, "debit", None),
    ("411", "Clients, ventes en compte", None, None, None),
    ("412", "Clients, effets à recevoir", None, None, None),
    ("5", "Comptes de trésorerie", "asset", None, "Disponibilités et valeurs assimilées"),
    ("51", "Banques", None, "debit", None),
    ("511", "Banque A", None, None, None),
    ("512", "Banque B", None, None, None),
    ("52", "Caisse", None, "debit", None),
    ("521", "Caisse principale", None, None, None),
    ("522", "Caisse annexe", None, None, None),
    ("6", "Comptes de charges", "expense", None, "Charges d'exploitation et financières"),
    ("60", "Achats", None, "debit", None),
    ("601", "Achats de marchandises", None, None, None),
    ("602", "Achats de matières premières", None, None, None),
    ("61", "Services extérieurs", None, "debit", None),
    ("611", "Sous-traitance générale", None, None, None),
    ("612", "Locations", None, None, None),
    ("7", "Comptes de produits", "revenue", None, "Produits d'exploitation et financiers"),
    ("70", "Ventes", None, "credit", None),
    ("701", "Ventes de marchandises", None, None, None),
    ("702", "Ventes de produits finis", None, None, None),
    ("71", "Production stockée", None, "credit", None),
    ("711", "Variation des stocks de produits finis", None, None, None),
    ("712", "Variation des stocks de produits en cours", None, None, None),
]
