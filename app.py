#!/usr/bin/env python3
"""
PropertyHub Backend Application Runner
"""
import os
from propertyhub import create_app, db
from propertyhub.models import User, Property, Favorite, Recommendation

app = create_app()

@app.shell_context_processor
def make_shell_context():
    return {
        'db': db,
        'User': User,
        'Property': Property,
        'Favorite': Favorite,
        'Recommendation': Recommendation
    }

if __name__ == '__main__':
    port = int(os.getenv('PORT', 5000))
    debug = os.getenv('FLASK_ENV') == 'development'
    app.run(host='0.0.0.0', port=port, debug=debug)
