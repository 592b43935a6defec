"""
Default catalog structure: the top-level categories the library ships with and
the sub-category labels offered for each of them.
"""

DEFAULT_CATEGORIES = [
    {'name': 'EDEBIYAT', 'description': 'Edebiyat ve yazın eserleri', 'color': '#3B82F6'},
    {'name': 'TARIH', 'description': 'Tarih ve sosyal bilimler', 'color': '#10B981'},
    {'name': 'DIN-MITOLOJI', 'description': 'Din, tasavvuf ve mitoloji', 'color': '#8B5CF6'},
    {'name': 'FELSEFE', 'description': 'Felsefe ve düşünce tarihi', 'color': '#F59E0B'},
    {'name': 'HOBI', 'description': 'Hobi ve yaşam tarzı', 'color': '#EF4444'},
    {'name': 'BILIM ve SANAT', 'description': 'Bilim, teknoloji ve sanat', 'color': '#6366F1'},
]

SUB_CATEGORIES = {
    'EDEBIYAT': [
        'ROMAN',
        'SIIR',
        'OYKU',
        'DENEME',
        'INCELEME',
        'BIYOGRAFI',
        'DUNYA KLASIKLERI',
        'TURK KLASIKLERI',
    ],
    'TARIH': [
        'TURK POLITIKASI',
        'DUNYA POLITIKASI',
        'TARIH',
        'SOSYOLOJI',
        'ARASTIRMA',
        'TARIHI KISILER',
        'GAZETECILIK',
    ],
    'DIN-MITOLOJI': [
        'TASAVVUF',
        'ISLAMIYET',
        'MEZHEPLER',
        'MITOLOJI',
        'DIN ADAMLARI',
        'DIGER DINLER',
    ],
    'FELSEFE': [
        'FELSEFE BILIMI',
        'FILOZOFLAR',
    ],
    'HOBI': [
        'YEMEK',
        'SPOR',
        'PSIKOLOJI',
        'HAYVANLAR',
        'BITKILER',
        'MODA',
        'ASTROLOJI',
        'RESIM',
    ],
    'BILIM ve SANAT': [
        'POPULER BILIM',
        'BILIM TARIHI',
        'BILIM INSANLARI',
        'SINEMA',
        'MUZIK',
        'TIYATRO',
        'SANAT TARIHI',
        'MIMARI',
        'FOTOGRAF',
        'SANATCILAR',
    ],
}
