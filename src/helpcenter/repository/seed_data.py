# built-in dataset, served by the static record source when no data file is configured

CATEGORIES = [
  {
    "id": "1",
    "name": "SRE Writer",
    "description": "Panduan menggunakan SRE Writer untuk menulis konten",
    "icon": "IconPencil",
    "color": "#3b82f6",
    # cached by the source, the snapshot derives its own count
    "articleCount": 12,
  },
  {
    "id": "2",
    "name": "SRE Brain",
    "description": "Panduan menggunakan SRE Brain untuk analisis dan insights",
    "icon": "IconBrain",
    "color": "#8b5cf6",
    "articleCount": 8,
  },
]

ARTICLES = [
  {
    "id": "1",
    "title": "Cara membuat artikel baru di SRE Writer",
    "content": "Panduan lengkap membuat artikel baru menggunakan SRE Writer dengan fitur-fitur yang tersedia.",
    "categoryId": "1",
    "views": 1250,
    "helpful": 89,
    "tags": ["sre-writer", "artikel", "konten"],
  },
  {
    "id": "2",
    "title": "Mengedit konten di SRE Writer",
    "content": "Langkah-langkah untuk mengedit dan memperbaiki konten yang sudah ada di SRE Writer.",
    "categoryId": "1",
    "views": 980,
    "helpful": 76,
    "tags": ["sre-writer", "edit", "konten"],
  },
  {
    "id": "3",
    "title": "Analisis data dengan SRE Brain",
    "content": "Cara melakukan analisis data menggunakan fitur SRE Brain untuk mendapatkan insights.",
    "categoryId": "2",
    "views": 750,
    "helpful": 65,
    "tags": ["sre-brain", "analisis", "data"],
  },
  {
    "id": "4",
    "title": "Dashboard insights SRE Brain",
    "content": "Panduan menggunakan dashboard insights untuk monitoring dan visualisasi data.",
    "categoryId": "2",
    "views": 650,
    "helpful": 58,
    "tags": ["sre-brain", "dashboard", "insights"],
  },
  {
    "id": "5",
    "title": "Format penulisan di SRE Writer",
    "content": "Panduan format dan struktur penulisan yang baik untuk konten yang efektif.",
    "categoryId": "1",
    "views": 580,
    "helpful": 45,
    "tags": ["sre-writer", "format", "penulisan"],
  },
  {
    "id": "6",
    "title": "Integrasi data SRE Brain",
    "content": "Cara mengintegrasikan data dari berbagai sumber ke dalam SRE Brain.",
    "categoryId": "2",
    "views": 420,
    "helpful": 38,
    "tags": ["sre-brain", "integrasi", "data"],
  },
]
